"""
apiwalk - calling public JSON APIs, step by step

Modules:
- core: request building, HTTP execution, JSON decoding, safe extraction, projection
- config: settings loaded from env / .env
- parliament: annunciator + members API lookups
- weather: NWS hourly forecast table and chart
- cli: Typer walkthrough commands
"""

__version__ = "0.1.0"
