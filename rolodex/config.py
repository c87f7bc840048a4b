from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

DEFAULT_SECRET_KEY = "development-secret-change-me"


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read application settings from the environment.

    The returned mapping is meant for ``app.config.from_mapping``.
    """

    env = os.environ if environ is None else environ
    return {
        "SECRET_KEY": env.get("FLASK_SECRET_KEY", DEFAULT_SECRET_KEY),
        "RECIPE_STORE": env.get("RECIPE_STORE", "firestore").strip().lower(),
        "GCP_PROJECT": env.get("GCP_PROJECT") or None,
        "RECIPES_COLLECTION": env.get("RECIPES_COLLECTION", "recipes"),
        "RECIPE_SEED_FILE": env.get("RECIPE_SEED_FILE") or None,
        "LOG_LEVEL": env.get("LOG_LEVEL", "INFO").upper(),
    }


__all__ = ["DEFAULT_SECRET_KEY", "load_config"]
