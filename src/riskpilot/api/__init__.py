"""
RiskPilot HTTP API

FastAPI application exposing the analysis engine and the knowledge base.
"""
