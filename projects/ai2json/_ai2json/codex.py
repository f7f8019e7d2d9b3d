import json
import shutil
from typing import Any
from ..ai2json import TheAI2JSON

class Codex2JSON(TheAI2JSON):
    def ai(self) -> str:
        return "codex"

    def _get_args(self, system_prompt: str, user_prompt: str) -> tuple[list[str], str | None]:
        # codex exec has no separate system prompt, both parts go through stdin
        entry = shutil.which("codex") or "codex"
        args = [
            entry,
            "exec",
            "--sandbox",
            "read-only",
            "--skip-git-repo-check",
            "--json",
            "-",
        ]
        return args, system_prompt + "\n\n" + user_prompt

    def _parse_stdout(self, stdout: str) -> tuple[str | None, str | None]:
        # JSONL event stream; the answer is the last agent message.
        # Current: {"type":"item.completed","item":{"type":"agent_message","text":"..."}}
        # Legacy:  {"msg":{"type":"agent_message","message":"..."}}
        message = None
        for line in stdout.splitlines():
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(event, dict):
                continue

            item = event.get("item")
            if event.get("type") == "item.completed" and isinstance(item, dict) and item.get("type") == "agent_message":
                message = self._text(item.get("text")) or message
            msg = event.get("msg")
            if isinstance(msg, dict) and msg.get("type") == "agent_message":
                message = self._text(msg.get("message")) or message

        if message is None:
            return None, "[ERR] _parse_stdout: no agent message found"
        return message, None

    def _text(self, text: Any) -> str | None:
        if not isinstance(text, str) or not text.strip():
            return None
        fenced = self._strip_fence(text)
        return text if fenced is None else fenced
