"""
Commit 訊息片段分類

判斷 " - " 之後的片段是功能名稱 (併入標題) 還是子任務。
"""

from dataclasses import dataclass
from typing import Callable, Iterable

# 以這些動詞開頭的片段視為子任務
ACTION_VERBS: tuple[str, ...] = (
    "add", "fix", "update", "remove", "delete", "place", "use", "enable",
    "disable", "migrate", "refactor", "cleanup", "rename", "show", "hide",
    "set", "implement", "improve", "revert", "replace", "move", "output",
    "call", "upd", "initial", "build",
)

# 判斷片段是否為功能名稱的 predicate
FeatureNamePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class FeatureNameClassifier:
    """
    功能名稱判斷器

    片段不以動作動詞開頭 (不分大小寫的前綴比對)，且首字為大寫時，
    視為功能名稱。
    """
    verbs: tuple[str, ...] = ACTION_VERBS

    @classmethod
    def from_verbs(cls, verbs: Iterable[str]) -> "FeatureNameClassifier":
        return cls(verbs=tuple(v.strip().lower() for v in verbs if v.strip()))

    def starts_with_action_verb(self, fragment: str) -> bool:
        lowered = fragment.lower()
        return any(lowered.startswith(verb) for verb in self.verbs)

    def __call__(self, fragment: str) -> bool:
        fragment = fragment.strip()
        if not fragment:
            return False
        return not self.starts_with_action_verb(fragment) and fragment[0].isupper()


default_classifier = FeatureNameClassifier()
