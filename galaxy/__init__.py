"""Procedural spiral galaxy generation."""

from .errors import GalaxyError, InvalidParameter, ResourceExhaustion
from .parameters import GalaxyParameters, parse_color
from .generator import PointFieldGenerator
from .spatial_hash import SpatialHashGrid
from .connections import ConnectionGraph, ConnectionGraphBuilder
from .pipeline import GalaxyBuffers, GalaxyPipeline

__all__ = [
    "GalaxyError",
    "InvalidParameter",
    "ResourceExhaustion",
    "GalaxyParameters",
    "parse_color",
    "PointFieldGenerator",
    "SpatialHashGrid",
    "ConnectionGraph",
    "ConnectionGraphBuilder",
    "GalaxyBuffers",
    "GalaxyPipeline",
]
