"""DevDecision Referee MCP Server.

Compare up to five technologies side by side: weighted, priority-aware
scores, radar-chart data, and KPI figures from a local technology catalog.
"""

__version__ = "0.1.0"
