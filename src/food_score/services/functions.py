"""Additive function classification."""

from dataclasses import dataclass

from food_score.domain.additives import (
    AdditiveFunction,
    FunctionGroup,
    FunctionInfo,
    normalize_code,
)

FUNCTION_ORDER: tuple[AdditiveFunction, ...] = (
    "preservative",
    "coloring",
    "sweetener",
    "flavor_enhancer",
    "emulsifier",
    "thickener",
    "stabilizer",
    "antioxidant",
    "acidity_regulator",
    "raising_agent",
    "glazing_agent",
    "anti_caking",
    "humectant",
    "foaming_agent",
    "other",
)


@dataclass
class FunctionClassifier:
    """Maps additive codes to their functional categories."""

    _codes: dict[str, tuple[AdditiveFunction, ...]]
    _info: dict[AdditiveFunction, FunctionInfo]

    def __init__(
        self,
        codes: dict[str, list[AdditiveFunction]],
        categories: list[FunctionInfo],
    ) -> None:
        self._codes = {
            normalize_code(code): tuple(functions) for code, functions in codes.items()
        }
        self._info = {info.function: info for info in categories}

    def functions_of(self, code: str) -> tuple[AdditiveFunction, ...]:
        """Return the ordered categories for a code, ``other`` when unmapped."""
        return self._codes.get(normalize_code(code)) or ("other",)

    def info(self, function: AdditiveFunction) -> FunctionInfo:
        return self._info[function]

    def group_by_function(self, codes: list[str]) -> list[FunctionGroup]:
        """Group codes under their primary function in display order."""
        groups: dict[AdditiveFunction, list[str]] = {}
        for code in codes:
            primary = self.functions_of(code)[0]
            groups.setdefault(primary, []).append(normalize_code(code))
        return [
            FunctionGroup(function=function, info=self.info(function), codes=groups[function])
            for function in FUNCTION_ORDER
            if function in groups
        ]

    def unique_functions(self, codes: list[str]) -> list[AdditiveFunction]:
        seen: list[AdditiveFunction] = []
        for code in codes:
            for function in self.functions_of(code):
                if function not in seen:
                    seen.append(function)
        return seen

    def has_function(self, codes: list[str], function: AdditiveFunction) -> bool:
        return any(function in self.functions_of(code) for code in codes)

    def codes_with_function(
        self, codes: list[str], function: AdditiveFunction
    ) -> list[str]:
        return [
            normalize_code(code) for code in codes if function in self.functions_of(code)
        ]
