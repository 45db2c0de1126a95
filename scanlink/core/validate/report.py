"""Validation report types for draft field checks."""


from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    severity: str = "error"
    field: str | None = None


@dataclass
class ValidationReport:
    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors_by_field(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for issue in self.issues:
            if issue.field and issue.field not in out:
                out[issue.field] = issue.message
        return out


__all__ = ["ValidationIssue", "ValidationReport"]
