"""Plotting of search results and fractal spirals."""

from apocalypse_search.visualization.plots import (
    render_non_match_deviations,
    plot_non_match_deviations,
    plot_apocalypse_density,
    density_bins,
)
from apocalypse_search.visualization.fractal import (
    parse_constant,
    spiral_points,
    spiral_coordinates,
    plot_spiral,
)

__all__ = [
    "render_non_match_deviations",
    "plot_non_match_deviations",
    "plot_apocalypse_density",
    "density_bins",
    "parse_constant",
    "spiral_points",
    "spiral_coordinates",
    "plot_spiral",
]
