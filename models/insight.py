from dataclasses import dataclass, field

INSIGHT_KINDS = ("warning", "tip", "success", "info")


@dataclass(frozen=True)
class Insight:
    kind: str  # one of INSIGHT_KINDS
    title: str
    description: str
    rule: str  # identifier of the rule that emitted it
    details: dict = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "title": self.title,
            "description": self.description,
            "rule": self.rule,
            "details": self.details,
        }
