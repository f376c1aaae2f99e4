from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class MechanicSet:
    """
    Fine-grained mechanic flags used by the synergy synthesizer.

    Flags are independent and commonly co-occur. For example, aristocrats
    is only ever true alongside dies or sacrifice.
    """

    tokens: bool = False
    treasure: bool = False
    etb: bool = False
    blink: bool = False
    dies: bool = False
    sacrifice: bool = False
    aristocrats: bool = False
    counters: bool = False
    plus_counters: bool = False
    proliferate: bool = False
    graveyard: bool = False
    reanimate: bool = False
    self_mill: bool = False
    spellslinger: bool = False
    copy_spells: bool = False
    cost_reduce: bool = False
    equipment: bool = False
    aura: bool = False
    artifacts: bool = False
    enchantments: bool = False
    lifegain: bool = False
    voltron: bool = False
    go_wide: bool = False
    big_mana: bool = False
    mana_sink: bool = False
    tribal: bool = False
    planeswalker: bool = False

    def active(self) -> list[str]:
        """Names of the flags that are set, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


MECHANIC_NAMES: tuple[str, ...] = tuple(f.name for f in fields(MechanicSet))
