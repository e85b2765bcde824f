"""Light extinction coefficient estimation."""

from cascowq.estimate.extinction import (
    ProfileFit,
    compute_irradiance_pct,
    estimate_extinction,
    estimate_extinction_file,
    fit_profile,
    load_site_names,
    order_sites_by_k,
    summarize_extinction,
    write_extinction,
)

__all__ = [
    "ProfileFit",
    "compute_irradiance_pct",
    "estimate_extinction",
    "estimate_extinction_file",
    "fit_profile",
    "load_site_names",
    "order_sites_by_k",
    "summarize_extinction",
    "write_extinction",
]
