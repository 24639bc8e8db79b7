"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    HYDRA_PROJECT_ROOT      — Project root that manifest paths are relative to (default: cwd)
    HYDRA_MANIFEST_FILE     — Manifest file name under the project root (default: .hydra-manifest.json)
    HYDRA_DEFAULT_RATIO     — Bugs injected per real fix when the caller gives none (default: 2)
    HYDRA_DEFAULT_SEVERITY  — Target severity 1–5 when the caller gives none (default: 3)
    HYDRA_DEFAULT_SCOPE     — Directory searched for injection targets (default: src/)
    HYDRA_LOG_DIR           — Directory for the daily log file; empty disables file logging (default: logs)

Manifest Location:
    The manifest is a single JSON document at a fixed, project-relative path.
    Every injected bug stores its file path relative to HYDRA_PROJECT_ROOT, so
    the reverter resolves files against the same root the injector used.
"""
import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.getenv("HYDRA_PROJECT_ROOT", "")
MANIFEST_FILE = os.getenv("HYDRA_MANIFEST_FILE", ".hydra-manifest.json")

DEFAULT_RATIO = int(os.getenv("HYDRA_DEFAULT_RATIO", 2))
DEFAULT_SEVERITY = int(os.getenv("HYDRA_DEFAULT_SEVERITY", 3))
DEFAULT_SCOPE = os.getenv("HYDRA_DEFAULT_SCOPE", "src/")

LOG_DIR = os.getenv("HYDRA_LOG_DIR", "logs")


def project_root() -> str:
    """Absolute project root; falls back to the current working directory."""
    return os.path.abspath(PROJECT_ROOT or os.getcwd())


def manifest_path(root: str = "") -> str:
    """Absolute manifest path for the given (or configured) project root."""
    return os.path.join(os.path.abspath(root) if root else project_root(), MANIFEST_FILE)
