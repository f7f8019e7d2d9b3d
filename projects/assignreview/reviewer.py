from typing import Any
from ..ai2json.index import AI2JSON
from .architecture import ModelInvocationError, Prompt, Reviewer

class TheReviewer(Reviewer):
    def __init__(self, ai: str, tmp: str | None = None):
        self.cli = AI2JSON.create(ai, tmp)

    def ai(self) -> str:
        return self.cli.ai()

    def review(self, prompt: Prompt, timeout: int = 0) -> dict[str, Any]:
        args, stdin_prompt, timeout = self.cli.init(prompt.system, prompt.user, timeout)
        data, err = self.cli.exec(args, timeout, stdin_prompt)
        if data is None or err:
            raise ModelInvocationError(err or f"[ERR] {self.ai()} returned no data")
        data, err = self._data_check(data)
        if err:
            raise ModelInvocationError(err)
        return data

    def _data_check(self, data: Any) -> tuple[Any, str | None]:
        if not isinstance(data, dict):
            return None, "[ERR] _data_check: <data> must be a dictionary"

        # Surface AI-side failures reported inside the payload
        if isinstance(data.get("error"), str) and data["error"].strip() != "":
            return None, f"[ERR] _data_check: <error> = {data['error']}"

        if not isinstance(data.get("review"), str):
            return None, "[ERR] _data_check: <review> must be a string"
        if not isinstance(data.get("flag"), bool):
            return None, "[ERR] _data_check: <flag> must be a boolean"
        # Some answers leave the unit out when the verdict concerns the whole file
        if data.get("func") is None:
            data["func"] = ""
        elif not isinstance(data["func"], str):
            return None, "[ERR] _data_check: <func> must be a string"
        return data, None
