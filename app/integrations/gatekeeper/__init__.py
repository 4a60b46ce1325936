"""
Gatekeeper Integration Module

Forwards canonical analysis requests to the external risk-analysis engine.
"""

from app.integrations.gatekeeper.client import AnalysisForwarder, ForwardingError

__all__ = ["AnalysisForwarder", "ForwardingError"]
