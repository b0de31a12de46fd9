"""Starry Geo Application Entry Point.

Simple redirect to the dashboard app.

Run with: streamlit run app.py
(requires the geolocation backend at API_BASE_URL)
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

# Import and run the dashboard app
from starry_geo.app import main

if __name__ == "__main__":
    main()
