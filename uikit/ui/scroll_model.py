from dataclasses import dataclass

@dataclass
class ScrollModel:
    """One scroll axis: content length, visible length, and the offset into the content."""
    content: float = 0.0
    viewport: float = 0.0
    offset: float = 0.0

    def max(self) -> float: return max(0.0, float(self.content - self.viewport))
    def clamped(self, v: float) -> float: return max(0.0, min(self.max(), float(v)))
    def overflows(self) -> bool: return self.content > self.viewport

    def set(self, v: float) -> bool:
        """Move to `v` (clamped). True if the offset actually changed."""
        new = self.clamped(v)
        if new == self.offset:
            return False
        self.offset = new
        return True

    def clamp(self) -> bool: return self.set(self.offset)
