from .figure import plot_network

__all__ = ["plot_network"]
