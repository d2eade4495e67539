from __future__ import annotations

from collections import deque
from typing import Iterable, List

from rivals.engine.player import Player


class ScriptedPlayer(Player):
    """Replays queued answers and records every message it is sent.

    Once the script runs out each prompt gets ``default_answer``.
    """

    def __init__(self, name: str, inputs: Iterable[str] = (), default_answer: str = "END", max_prompt_attempts: int = 3):
        super().__init__(name, max_prompt_attempts=max_prompt_attempts)
        self.inputs = deque(inputs)
        self.default_answer = default_answer
        self.messages: List[str] = []

    def send_message(self, text: str) -> None:
        self.messages.append(text)

    def receive_input(self) -> str:
        if self.inputs:
            return self.inputs.popleft()
        return self.default_answer

    def saw(self, fragment: str) -> bool:
        return any(fragment in message for message in self.messages)
