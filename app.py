"""FastAPI web app exposing the coverage model to a browser front end."""

import logging
from typing import List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from netcover.core import ConfigurationError, NetworkConfig, NetworkModel, PreconditionError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Network Coverage Editor")

# ============================================================================
# Data models
# ============================================================================

class StationIn(BaseModel):
    x: float
    y: float
    reach: float = 0

class DeviceIn(BaseModel):
    x: float
    y: float

class NetworkIn(BaseModel):
    stations: List[StationIn] = []
    devices: List[DeviceIn] = []

class FieldEdit(BaseModel):
    field: str
    value: Union[float, str]

class Layout(BaseModel):
    plot_length_px: Optional[float] = None

# ============================================================================
# Session
# ============================================================================

CONFIG = NetworkConfig.from_env()
_session = {"model": NetworkModel(config=CONFIG)}


def current_model() -> NetworkModel:
    return _session["model"]


def _state() -> dict:
    return {"ok": True, "state": current_model().snapshot()}


def _entity_dict(item: BaseModel) -> dict:
    # Integral floats (e.g. 5.0 from JSON) become ints; the model rejects the rest
    return {k: int(v) if float(v).is_integer() else v for k, v in item.model_dump().items()}

# ============================================================================
# API endpoints
# ============================================================================

@app.get("/api/state")
async def get_state():
    return _state()

@app.post("/api/reset")
async def reset(network: NetworkIn):
    try:
        model = NetworkModel(
            stations=[_entity_dict(s) for s in network.stations],
            devices=[_entity_dict(d) for d in network.devices],
            config=CONFIG,
        )
        state = model.snapshot()
    except ConfigurationError as e:
        logger.warning("Rejected network: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    # Swap only once the new model has rendered
    _session["model"] = model
    return {"ok": True, "state": state}

@app.post("/api/stations")
async def add_station():
    current_model().add_station()
    return _state()

@app.post("/api/devices")
async def add_device():
    current_model().add_device()
    return _state()

@app.delete("/api/stations/{index}")
async def remove_station(index: int):
    try:
        current_model().remove_station(index)
    except PreconditionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state()

@app.delete("/api/devices/{index}")
async def remove_device(index: int):
    try:
        current_model().remove_device(index)
    except PreconditionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _state()

@app.patch("/api/stations/{index}")
async def edit_station(index: int, edit: FieldEdit):
    try:
        accepted = current_model().edit_station_field(index, edit.field, edit.value)
    except PreconditionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {**_state(), "accepted": accepted}

@app.patch("/api/devices/{index}")
async def edit_device(index: int, edit: FieldEdit):
    try:
        accepted = current_model().edit_device_field(index, edit.field, edit.value)
    except PreconditionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {**_state(), "accepted": accepted}

@app.post("/api/layout")
async def report_layout(layout: Layout):
    try:
        current_model().report_plot_width_px(layout.plot_length_px)
    except PreconditionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
