"""Staging → canonical normalization."""

from restohub.pipeline.normalizer import NormalizationRunner, NormalizationSummary

__all__ = ["NormalizationRunner", "NormalizationSummary"]
