import os
import json

# --- CONFIGURATION LOADER ---
HOME = os.path.expanduser("~")
CONFIG_DIR = os.path.join(HOME, "KTime")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

# default settings
defaults = {
    "db_path": os.path.join(CONFIG_DIR, "ktime.db"),
    "script_filename": "fyningtime2ktime.migration.sql",
    "default_vacation_type": "OTHER",
    "log_level": "INFO",
    "preview_limit": 5,
}


def load_config(path=CONFIG_PATH):
    """Load config.json, creating it with defaults on first run."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if not os.path.exists(path):
        with open(path, 'w') as f:
            json.dump(defaults, f, indent=2)
        return defaults.copy()
    with open(path, 'r') as f:
        user = json.load(f)
    # merge defaults with user overrides
    cfg = defaults.copy()
    cfg.update({k: v for k, v in user.items() if k in defaults})
    return cfg


CONFIG = load_config()

# expose top‑level constants
DB_PATH = CONFIG['db_path']
SCRIPT_FILENAME = CONFIG['script_filename']
DEFAULT_VACATION_TYPE = CONFIG['default_vacation_type']
LOG_LEVEL = CONFIG['log_level']
PREVIEW_LIMIT = int(CONFIG['preview_limit'])
