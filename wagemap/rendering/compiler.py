"""Map Color Compiler: one declarative fill-color rule for every county.

The renderer colors features by their county-name property (and, on name
collisions, their state-code property). Compiling the whole rule at once and
applying it as a single paint-property update keeps salary-slider drags cheap;
nothing here iterates over rendered features.

Algorithm:
1. Classify each wage area against the salary -> area code to color
2. Group reverse-index keys by normalized county name and collect the
   (state FIPS, color) pairs that have data
3. Rebuild a display label from the normalized name (heuristic title case,
   overridable)
4. Emit a direct name arm when a group has one color, a nested state match
   when it has several
5. Fall back to the "no data" color
"""

from functools import partial
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from wagemap.classification.engine import classify as classify_salary
from wagemap.classification.models import DEFAULT_PALETTE, ColorPalette, TierClassification
from wagemap.domain.models import WageArea
from wagemap.geography.normalize import CountyKey, display_county_name
from wagemap.geography.resolver import ReverseIndex
from wagemap.logging import get_logger

from .models import PaintRule

logger = get_logger(__name__, component="compiler")

Classifier = Callable[[float, WageArea], TierClassification]


def compile_paint_rule(
    reverse_index: ReverseIndex,
    wage_areas: Sequence[WageArea],
    salary: float,
    classify: Optional[Classifier] = None,
    palette: ColorPalette = DEFAULT_PALETTE,
    name_property: str = "NAME",
    state_property: str = "STATE",
    display_name_overrides: Optional[Mapping[str, str]] = None,
    strict_state_matching: bool = False,
) -> PaintRule:
    """Compile the fill-color expression for the current salary and wage set.

    Args:
        reverse_index: County reverse index
        wage_areas: Wage records for the selected job category
        salary: Offered annual salary
        classify: Salary classifier; defaults to the engine bound to ``palette``
        palette: Supplies the "no data" color (and tier colors by default)
        name_property: Feature property holding the county name
        state_property: Feature property holding the 2-digit state FIPS code
        display_name_overrides: Normalized name -> renderer label, for names
            that plain title case gets wrong ("dekalb" -> "DeKalb")
        strict_state_matching: Nest by state whenever a name exists in more
            than one state, even if only one of them has a color

    Returns:
        PaintRule with the expression and compilation statistics
    """
    classifier = classify or partial(classify_salary, palette=palette)
    overrides = display_name_overrides or {}

    area_colors: Dict[int, str] = {}
    for wage in wage_areas:
        area_colors.setdefault(wage.area_code, classifier(salary, wage).color)

    arms: List[Any] = []
    seen_labels = set()
    direct = nested = 0

    for name in reverse_index.names():
        keys = reverse_index.keys_for_name(name)
        state_colors = _state_colors(reverse_index, keys, area_colors)
        if not state_colors:
            continue

        label = overrides.get(name) or display_county_name(name)
        if label in seen_labels:
            logger.warning(
                "Duplicate county label skipped",
                extra={"event": "compiler.label.duplicate", "label": label, "county": name},
            )
            continue
        seen_labels.add(label)

        distinct_colors = {color for _, color in state_colors}
        needs_state = len(distinct_colors) > 1 or (strict_state_matching and len(keys) > 1)

        if needs_state:
            state_match: List[Any] = ["match", ["get", state_property]]
            for fips, color in state_colors:
                state_match.extend([fips, color])
            state_match.append(palette.no_data)
            arms.extend([label, state_match])
            nested += 1
        else:
            arms.extend([label, state_colors[0][1]])
            direct += 1

    if arms:
        expression: Any = ["match", ["get", name_property], *arms, palette.no_data]
    else:
        expression = palette.no_data

    logger.debug(
        "Paint rule compiled",
        extra={
            "event": "compiler.rule.compiled",
            "salary": salary,
            "colored_areas": len(area_colors),
            "direct_names": direct,
            "nested_names": nested,
        },
    )

    return PaintRule(
        expression=expression,
        colored_areas=len(area_colors),
        direct_names=direct,
        nested_names=nested,
    )


def _state_colors(
    reverse_index: ReverseIndex, keys: Sequence[CountyKey], area_colors: Mapping[int, str]
) -> List[Tuple[str, str]]:
    """(state FIPS, color) for each key whose area codes have a color."""
    pairs = []
    for key in keys:
        for code in reverse_index.get(key):
            color = area_colors.get(code)
            if color is not None:
                pairs.append((key.state_fips, color))
                break
    return pairs


class PaintRuleCache:
    """Memoizes the last compiled rule by (wage-set generation, salary).

    Compilation options are fixed per cache. Hover bursts and repeated
    renders with unchanged inputs reuse the previous rule; a new salary or a
    new wage snapshot recompiles.
    """

    def __init__(self, reverse_index: ReverseIndex, **compile_options):
        self.reverse_index = reverse_index
        self.compile_options = compile_options
        self._key: Optional[Tuple[int, float]] = None
        self._rule: Optional[PaintRule] = None

    def rule_for(self, generation: int, wage_areas: Sequence[WageArea], salary: float) -> PaintRule:
        key = (generation, float(salary))
        if self._rule is None or key != self._key:
            self._rule = compile_paint_rule(
                self.reverse_index, wage_areas, salary, **self.compile_options
            )
            self._key = key
        return self._rule

    def invalidate(self) -> None:
        self._key = None
        self._rule = None
