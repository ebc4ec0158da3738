"""
Strava API resource functions.

Stateless wrappers around the Strava v3 REST API, one module per resource:

- activities, athletes, clubs, gears, routes, segments, segment_efforts,
  streams, uploads: one function per operation, access token first
- models / parsers: typed records for the main resources
- http: the single authenticated request path all functions use

Every function issues exactly one request, never retries and raises the
errors in strava_api.exceptions.
"""

from . import (
    activities,
    athletes,
    clubs,
    gears,
    routes,
    segment_efforts,
    segments,
    streams,
    uploads,
)

__all__ = [
    "activities",
    "athletes",
    "clubs",
    "gears",
    "routes",
    "segment_efforts",
    "segments",
    "streams",
    "uploads",
]
