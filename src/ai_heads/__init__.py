"""AI Heads Command Centre: delivery scoreboard for the AI heads team."""

__version__ = "0.1.0"
