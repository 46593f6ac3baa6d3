"""Schema stitching merger, selected in the gateway config with ``merger: stitching``"""
from meshwire.gql.merger import stitching_merger

__all__ = ["default"]

default = stitching_merger
