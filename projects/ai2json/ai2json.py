import json
import subprocess
from typing import Any
from pathlib import Path
from abc import abstractmethod
from .index import AI2JSON

# Base class for subprocess-driven AI providers; concrete CLIs live in ./_ai2json/
class TheAI2JSON(AI2JSON):
    def __init__(self, tmp: str | None = None):
        self.tmp = Path(tmp) if tmp else None

    def init(self, system_prompt: str, user_prompt: str, timeout: int = 0) -> tuple[list[str], str | None, int]:
        if timeout <= 0:
            per_kb = self._perKB() if timeout == 0 else -timeout
            size_kb = len(system_prompt + user_prompt) >> 10  # ~KB, close enough for a time budget
            timeout = per_kb * size_kb + self._timeout()
        args, stdin_prompt = self._get_args(system_prompt, user_prompt)
        return args, stdin_prompt, timeout

    def exec(self, args: list[str], timeout: int, stdin_prompt: str | None = None) -> tuple[Any, str | None]:
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding='utf-8',
                timeout=timeout,
                input=stdin_prompt,
            )
        except subprocess.TimeoutExpired:
            return None, f"[ERR] {self.ai()} timed out after {timeout}s"
        except OSError as e:  # Executable missing or not runnable
            return None, f"[ERR] {self.ai()} could not be started: {e}"

        if completed.returncode != 0:
            stderr = (completed.stderr or 'no stderr')[:2000]
            return None, f"[ERR] {self.ai()} exited with {completed.returncode}: {stderr}"

        self._dump('stdout.txt', completed.stdout)

        payload, err = self._parse_stdout(completed.stdout)
        if payload is None:
            print(f"[WARNING] {self.ai()}: falling back to fenced payload")
            payload = self._strip_fence(completed.stdout)
            if payload is None:
                return None, err
        return self._extract_json(payload)

    def _dump(self, fn: str, text: str) -> bool:
        # Debug aid only: a failed dump never fails the call
        if not self.tmp:
            return False
        try:
            self.tmp.mkdir(parents=True, exist_ok=True)
            (self.tmp / f"{self.ai()}.{fn}").write_text(text, encoding='utf-8')
            return True
        except OSError:
            return False

    @abstractmethod
    def _get_args(self, system_prompt: str, user_prompt: str) -> tuple[list[str], str | None]:
        # Provider CLI arguments and the stdin content (prompts go through stdin to dodge command-line limits)
        pass

    @abstractmethod
    def _parse_stdout(self, stdout: str) -> tuple[str | None, str | None]:
        # Provider-specific extraction of the model's answer text from CLI output
        pass

    def _strip_fence(self, text: str) -> str | None:
        # Content between the first ```json and the last ```, unparsed
        if not text:
            return None
        i = text.find('```json')
        if i < 0:
            return None
        text = text[i + len('```json'):]
        j = text.rfind('```')
        return text[:j] if j >= 0 else None

    def _extract_json(self, payload: str) -> tuple[Any, str | None]:
        # Outermost {...} of the payload as a dict
        if not payload:
            return None, "[ERR] _extract_json: payload is empty"
        i = payload.find('{')
        j = payload.rfind('}')
        if i < 0 or j < i:
            self._dump('payload.txt', payload)
            return None, "[ERR] _extract_json: no JSON object in payload"

        data = self._fix_json(payload[i:j + 1])
        if data is None:
            return None, "[ERR] _extract_json: can't parse JSON"
        if not isinstance(data, dict):
            return None, "[ERR] _extract_json: not a dictionary"
        return data, None

    def _fix_json(self, payload: str) -> Any | None:
        # Models often leave quotes inside string values unescaped; escape any '"' that
        # is not followed by a structural character and retry once
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            pass

        out: list[str] = []
        in_string = False
        escaped = False
        n = len(payload)
        for i, ch in enumerate(payload):
            if escaped:
                out.append(ch)
                escaped = False
            elif ch == '\\':
                out.append(ch)
                escaped = True
            elif ch != '"':
                out.append(ch)
            elif not in_string:
                in_string = True
                out.append(ch)
            else:
                k = i + 1
                while k < n and payload[k].isspace():
                    k += 1
                if k >= n or payload[k] in ':,]}':
                    in_string = False
                    out.append(ch)
                else:
                    out.append('\\"')

        try:
            return json.loads(''.join(out))
        except json.JSONDecodeError:
            self._dump('invalid.json', payload)
            return None

    def _timeout(self) -> int:
        # Base budget for CLI startup, network latency and cleanup
        return 300

    def _perKB(self) -> int:
        return 60

    @staticmethod
    def create(ai: str, tmp: str | None = None) -> AI2JSON:
        if ai == 'codex':
            from ._ai2json.codex import Codex2JSON
            return Codex2JSON(tmp)
        elif ai == 'claude':
            from ._ai2json.claude import Claude2JSON
            return Claude2JSON(tmp)
        else:
            raise ValueError(f"Unsupported AI [codex, claude]: {ai}")
