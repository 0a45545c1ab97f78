# rsa_trace.py
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class TraceStep:
    """One narrated arithmetic step: what went in, the formula, what came out."""
    label: str
    formula: str
    result: int
    value: Optional[int] = None       # code point (encrypt) or ciphertext integer (decrypt)
    character: Optional[str] = None   # decoded character (decrypt only)

    def render(self) -> str:
        if self.character is not None:
            return f"{self.formula} = {self.result} → {self.character!r}"
        if self.value is not None:
            return f"{self.label!r} ({self.value}): {self.formula} = {self.result}"
        return f"{self.label} = {self.formula} = {self.result}"

StepTrace = Tuple[TraceStep, ...]

def render_trace(trace: Iterable[TraceStep]) -> List[str]:
    """One display line per record, numbered from 1."""
    return [f"Step {i}: {step.render()}" for i, step in enumerate(trace, start=1)]

def trace_rows(trace: Iterable[TraceStep]) -> List[dict]:
    """Records as plain dicts (for tables)."""
    return [
        {
            "step": step.label,
            "input": step.value,
            "calculation": step.formula,
            "result": step.result,
            "character": step.character,
        }
        for step in trace
    ]
