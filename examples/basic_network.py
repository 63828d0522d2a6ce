#!/usr/bin/env python3
"""Basic coverage example.

Places three stations and a handful of devices on a 200×200 plot, prints
which station serves each device, edits the network, and saves a figure.
"""

import logging

from netcover.core import NetworkModel
from netcover.plot import plot_network


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    model = NetworkModel(
        stations=[
            {"x": 50, "y": 50, "reach": 60},
            {"x": 150, "y": 60, "reach": 40},
            {"x": 100, "y": 170, "reach": 0},
        ],
        devices=[
            {"x": 60, "y": 70},
            {"x": 140, "y": 80},
            {"x": 100, "y": 60},
            {"x": 100, "y": 170},
            {"x": 190, "y": 200},
        ],
    )

    def report(title: str) -> None:
        print("=" * 50)
        print(title)
        print("=" * 50)
        for i, dev in enumerate(model.devices):
            a = model.coverage.assignment_for(i)
            where = f"station {a.station_index + 1} @ speed {a.speed}" if a else "no signal"
            print(f"  device {i + 1:>2} ({dev.x:>3}, {dev.y:>3}): {where}")
        for k, v in model.stats().items():
            print(f"  {k:>20s}: {v}")

    report("Initial network")

    # Give the third station some range and drop the unreachable device
    model.edit_station_field(2, "reach", 50)
    model.remove_device(4)
    report("After edits")

    model.report_plot_width_px(600)
    for i in range(len(model.stations)):
        print(f"  station {i + 1}: {model.station_projection(i)}, ring {model.station_ring_radius_px(i):.1f}px")

    plot_network(model, save_path="coverage.png")
    print("Figure saved: coverage.png")


if __name__ == "__main__":
    main()
