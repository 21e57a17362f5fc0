import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_optional_int_env(name: str) -> Optional[int]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return None


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


USER_AGENT = get_str_env("USER_AGENT", "SiteCrawl/0.1")
DEFAULT_DEPTH = get_int_env("DEFAULT_DEPTH", 2)
DEFAULT_MAX_VISITED = get_int_env("DEFAULT_MAX_VISITED", 100)


def log_level() -> str:
	return (os.getenv("LOG_LEVEL", "WARNING") or "WARNING").strip().upper()
