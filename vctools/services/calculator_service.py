import copy
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel

from vctools.engine.fund_fees import compute_fund_fees, compute_tvpi_sensitivity
from vctools.engine.jcurve import simulate_fund
from vctools.engine.term_sheet import (
    TABLE_EXIT_VALUES, compare_term_sheets, compute_anti_dilution, compute_deal_structure, compute_liquidation,
)
from vctools.models.fund_fees import FundFeeParams
from vctools.models.jcurve import FundSimParams
from vctools.models.term_sheet import (
    AntiDilutionParams, DealParams, LiquidationParams, TermSheetComparisonParams,
)
from vctools.models.valuation import (
    ConvertibleNoteParams, MultiRoundParams, OptionPoolParams, OptionPricingParams,
    PreferredParams, VCMethodParams,
)
from vctools.valuation.convertible_notes import compute_convertible_note
from vctools.valuation.option_pool import compute_multi_round, compute_option_pool
from vctools.valuation.options_pricing import compute_option_pricing
from vctools.valuation.preferred import compute_cumulative_dividends, compute_participating_preferred
from vctools.valuation.vc_method import compute_vc_method

logger = logging.getLogger(__name__)


class UnknownToolError(Exception):
    """Raised when a tool name has no registered compute function."""
    def __init__(self, tool: str, available: list[str]):
        self.tool = tool
        self.available = available
        super().__init__(f"Unknown tool '{tool}'. Available: {', '.join(available)}")


class ParameterTypeError(TypeError):
    """Raised when a tool is called with the wrong parameter record."""
    def __init__(self, tool: str, expected: type, received: type):
        self.tool = tool
        self.expected = expected
        self.received = received
        super().__init__(
            f"Tool '{tool}' expects {expected.__name__}, got {received.__name__}"
        )


@dataclass(frozen=True)
class Tool:
    name: str
    params_type: type[BaseModel]
    compute: Callable[[Any], Any]


def _liquidation(params: LiquidationParams):
    deal = compute_deal_structure(params.deal)
    return compute_liquidation(deal, params.terms, params.exit_values or TABLE_EXIT_VALUES)


def _anti_dilution(params: AntiDilutionParams):
    return compute_anti_dilution(compute_deal_structure(params.deal), params.down_round, params.method)


def _comparison(params: TermSheetComparisonParams):
    sheets = [(sheet.deal, sheet.terms) for sheet in params.sheets]
    return compare_term_sheets(sheets, params.exit_values or TABLE_EXIT_VALUES)


DEFAULT_TOOLS: tuple[Tool, ...] = (
    Tool("fund-fees", FundFeeParams, compute_fund_fees),
    Tool("fund-fees-sensitivity", FundFeeParams, compute_tvpi_sensitivity),
    Tool("j-curve", FundSimParams, simulate_fund),
    Tool("deal-structure", DealParams, compute_deal_structure),
    Tool("liquidation", LiquidationParams, _liquidation),
    Tool("anti-dilution", AntiDilutionParams, _anti_dilution),
    Tool("term-sheet-comparison", TermSheetComparisonParams, _comparison),
    Tool("vc-method", VCMethodParams, compute_vc_method),
    Tool("option-pool", OptionPoolParams, compute_option_pool),
    Tool("multi-round", MultiRoundParams, compute_multi_round),
    Tool("convertible-note", ConvertibleNoteParams, compute_convertible_note),
    Tool("options-pricing", OptionPricingParams, compute_option_pricing),
    Tool("participating-preferred", PreferredParams, compute_participating_preferred),
    Tool("cumulative-dividends", PreferredParams, compute_cumulative_dividends),
)


class CalculatorService:
    """Runs calculators by name, reusing results for parameter records seen recently.

    Parameter records are frozen, so equal records hash equal and a cached result
    is always the one a fresh computation would produce. Callers get their own
    copy of a cached result, so editing one never leaks into later runs.
    """

    def __init__(self, tools: tuple[Tool, ...] = DEFAULT_TOOLS, memo_size: int = 128):
        self.tools: dict[str, Tool] = {t.name: t for t in tools}
        self.memo_size = memo_size
        self._cache: OrderedDict[tuple[str, BaseModel], Any] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def tool_names(self) -> list[str]:
        return sorted(self.tools)

    def run(self, tool_name: str, params: BaseModel) -> Any:
        tool = self.tools.get(tool_name)
        if tool is None:
            raise UnknownToolError(tool_name, self.tool_names)
        if not isinstance(params, tool.params_type):
            raise ParameterTypeError(tool_name, tool.params_type, type(params))

        key = (tool_name, params)
        if self.memo_size > 0 and key in self._cache:
            self.hits += 1
            self._cache.move_to_end(key)
            return copy.deepcopy(self._cache[key])

        self.misses += 1
        start = time.perf_counter()
        result = tool.compute(params)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"Tool '{tool_name}' computed in {duration_ms:.2f}ms")

        if self.memo_size > 0:
            self._cache[key] = copy.deepcopy(result)
            if len(self._cache) > self.memo_size:
                self._cache.popitem(last=False)
        return result

    def clear(self):
        self._cache.clear()
        self.hits = 0
        self.misses = 0
