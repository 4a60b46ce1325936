"""
GitHub Integration Module

Provides optional pull request enrichment from the GitHub API.
"""

from app.integrations.github.enrichment import (
    EnrichmentProvider,
    EnrichmentResult,
    GitHubEnrichmentProvider,
    NoopEnrichmentProvider,
    build_enrichment_provider,
)

__all__ = [
    "EnrichmentProvider",
    "EnrichmentResult",
    "GitHubEnrichmentProvider",
    "NoopEnrichmentProvider",
    "build_enrichment_provider",
]
