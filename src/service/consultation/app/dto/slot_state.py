import attrs


@attrs.define(frozen=True)
class SlotState:
    year: int
    month: int
    remaining: int
    max_slots: int
