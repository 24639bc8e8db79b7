"""
Fix Event Model
===============
Pydantic model for the external signal that seeds an injection run.

Produced by the (external) defect-repair step right after a genuine defect is
fixed. It is the anchor for relatedness scoring and is consumed once per
injection run.

Fields:
    file         — path of the file that was just fixed (absolute or root-relative)
    description  — human-readable summary of the fix (drives category fit)
    line         — 1-based line of the fix, recorded in the manifest (0 = unknown)
    diff         — diff of the real fix, recorded in the manifest
"""
from pydantic import BaseModel, ConfigDict


class FixEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    description: str = ""
    line: int = 0
    diff: str = ""
