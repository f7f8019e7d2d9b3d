import json
import shutil
from ..ai2json import TheAI2JSON

class Claude2JSON(TheAI2JSON):
    def ai(self) -> str:
        return "claude"

    def _get_args(self, system_prompt: str, user_prompt: str) -> tuple[list[str], str | None]:
        # Reviews only read the prompt, so no tool permissions are granted
        entry = shutil.which("claude") or "claude"
        args = [
            entry,
            "--print",
            "--output-format",
            "json",
            "--append-system-prompt",
            system_prompt,
        ]
        return args, user_prompt

    def _parse_stdout(self, stdout: str) -> tuple[str | None, str | None]:
        # --output-format json wraps the answer: {"type": "result", "result": "...", ...}
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError:
            return None, "[ERR] _parse_stdout: can't parse JSON from stdout"
        if not isinstance(data, dict):
            return None, "[ERR] _parse_stdout: not a dictionary"
        if data.get("is_error"):
            return None, f"[ERR] _parse_stdout: {data.get('result') or 'claude reported an error'}"

        result = data.get("result")
        if not isinstance(result, str) or not result.strip():
            return None, "[ERR] _parse_stdout: string <result> not found"
        return result.strip(), None
