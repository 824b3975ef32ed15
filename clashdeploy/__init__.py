"""Clashdeploy - deploys the ColorClash and RedVsBlue contracts to Arbitrum."""

__version__ = "0.1.0"
