"""
List the Gemini models available to the configured API key.

Use this when chat fails with a 404: pick a name that supports
generateContent and set it as GEMINI_MODEL.

Usage:
    python3 scripts/list_models.py [--all]
"""
import argparse
import logging
import os
import sys
from typing import Dict, List

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from config import get_settings

logger = logging.getLogger(__name__)


def fetch_models(base_url: str, api_key: str) -> List[Dict]:
    """Fetch every model page from the ListModels endpoint."""
    models: List[Dict] = []
    params = {"key": api_key}
    while True:
        response = requests.get(base_url, params=params, timeout=30)
        response.raise_for_status()
        data = response.json()
        models.extend(data.get("models", []))
        token = data.get("nextPageToken")
        if not token:
            return models
        params = {"key": api_key, "pageToken": token}


def supports_chat(model: Dict) -> bool:
    return "generateContent" in model.get("supportedGenerationMethods", [])


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--all", action="store_true", help="include models without generateContent")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
    settings = get_settings()
    if not settings.GEMINI_API_KEY:
        logger.error("GEMINI_API_KEY is not set")
        return 1

    try:
        models = fetch_models(settings.GEMINI_API_BASE_URL, settings.GEMINI_API_KEY)
    except requests.RequestException as e:
        logger.error(f"ListModels failed: {e}")
        return 1

    for m in models:
        if args.all or supports_chat(m):
            name = m.get("name", "").removeprefix("models/")
            marker = "*" if name == settings.GEMINI_MODEL else " "
            print(f"{marker} {name:<40} {m.get('displayName', '')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
