#!/usr/bin/env python3
"""
postgen

A FastAPI application that turns a client questionnaire (PDF) and room
visualizations into a ready to publish social media post plus a suggested
photo order, using Claude.

To start the server:
    python main.py
"""

import sys
from pathlib import Path

# add the project root to python path so the src package resolves
sys.path.insert(0, str(Path(__file__).parent))

# start the fastapi server when this file is run
if __name__ == "__main__":
    import uvicorn
    # run the api app on port 8000 with auto-reload for development
    uvicorn.run("src.postgen.api:app", host="0.0.0.0", port=8000, reload=True)
