"""
Persisted blob shapes for both schedulers.

Keys are camelCase on the wire. Any change to a shape requires bumping the
storage key version in lexidrill.domain.constants; there is no migration.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from lexidrill.domain.recall import History, ItemStat


class _Blob(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UnlockBlob(_Blob):
    unlocked_count_by_deck: dict[str, int] = Field(default_factory=dict)
    recent_outcomes_by_deck: dict[str, list[bool]] = Field(default_factory=dict)


class ItemStatBlob(_Blob):
    seen_count: int = Field(default=0, ge=0)
    known_count: int = Field(default=0, ge=0)
    unknown_count: int = Field(default=0, ge=0)
    last_answered_at: float | None = None

    @model_validator(mode="after")
    def counts_add_up(self) -> "ItemStatBlob":
        if self.seen_count != self.known_count + self.unknown_count:
            raise ValueError("seenCount must equal knownCount + unknownCount")
        return self


class RecallBlob(_Blob):
    stats_by_item_key: dict[str, ItemStatBlob] = Field(default_factory=dict)
    last_session_at: float | None = None
    total_answers: int = Field(default=0, ge=0)

    def to_history(self) -> History:
        return History(
            stats={
                key: ItemStat(
                    seen_count=s.seen_count,
                    known_count=s.known_count,
                    unknown_count=s.unknown_count,
                    last_answered_at=s.last_answered_at,
                )
                for key, s in self.stats_by_item_key.items()
            },
            total_answers=self.total_answers,
            last_session_at=self.last_session_at,
        )

    @classmethod
    def from_history(cls, history: History) -> "RecallBlob":
        return cls(
            stats_by_item_key={
                key: ItemStatBlob(
                    seen_count=s.seen_count,
                    known_count=s.known_count,
                    unknown_count=s.unknown_count,
                    last_answered_at=s.last_answered_at,
                )
                for key, s in history.stats.items()
            },
            last_session_at=history.last_session_at,
            total_answers=history.total_answers,
        )
