"""Runner doubles for the content generator."""

from __future__ import annotations

import json
from typing import Dict, List, Optional


def files_response(files: Dict[str, str], *, prefix: str = "") -> str:
    return prefix + json.dumps({"files": files, "analysis": {"structure": list(files)}})


class RecordingLLMRunner:
    """Returns queued responses in order and records every prompt."""

    def __init__(self, *responses: str) -> None:
        self.responses: List[str] = list(responses)
        self.calls: List[dict[str, object]] = []

    def run(self, prompt: str, *, system: str | None = None, max_tokens: Optional[int] = None) -> str:
        self.calls.append({"prompt": prompt, "system": system, "max_tokens": max_tokens})
        if not self.responses:
            raise RuntimeError("No response queued")
        return self.responses.pop(0)
