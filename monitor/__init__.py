"""
Situation monitor - headline enrichment, sentiment and correlation analytics.
"""

from monitor.pipeline import AnalysisPipeline, PipelineReport

__all__ = ["AnalysisPipeline", "PipelineReport"]
