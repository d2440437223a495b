"""Phoenix: a Discord RPG bot about travelling regions and fighting anomalies."""

__version__ = "0.1.0"
