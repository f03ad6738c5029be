# src/rf_chain_planner/optimizer.py
from __future__ import annotations

from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from itertools import product
from typing import Callable, Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union
import logging

from .catalog import indices_of_kind
from .components import Component
from .config_models import DEFAULT_CHAIN_LENGTH, Requirements, SearchSettings, SelectionConfig
from .progress import NullProgressReporter, ProgressReporter
from .validator import evaluate_configuration

logger = logging.getLogger(__name__)

IndexTuple = Tuple[int, ...]


def iter_index_tuples(
    n_items: int,
    length: int,
    first_index: Optional[int] = None,
) -> Iterator[IndexTuple]:
    """
    Lazily yield every ordered index tuple of the given length over
    range(n_items), repetition allowed, in lexicographic order.

    With first_index set, only the tuples starting with that index are
    produced (one partition of the full space).
    """
    if first_index is None:
        yield from product(range(n_items), repeat=length)
        return
    for rest in product(range(n_items), repeat=length - 1):
        yield (first_index,) + rest


@dataclass(frozen=True)
class Configuration:
    """One ordered candidate chain and the catalog indices it came from."""
    indices: IndexTuple
    components: Tuple[Component, ...]

    @property
    def total_cost(self) -> float:
        return sum(c.cost_usd for c in self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)


@dataclass
class SearchStats:
    """
    Bookkeeping for one sweep.

    candidates_total:
        Index tuples generated.
    candidates_evaluated:
        Tuples that contained the required kind and went to the validator.
    rejections:
        RejectionReason.value -> count, for evaluated tuples that failed.
    """
    candidates_total: int = 0
    candidates_evaluated: int = 0
    feasible: int = 0
    rejections: Dict[str, int] = field(default_factory=dict)

    def merge(self, other: "SearchStats") -> None:
        self.candidates_total += other.candidates_total
        self.candidates_evaluated += other.candidates_evaluated
        self.feasible += other.feasible
        counts = Counter(self.rejections)
        counts.update(other.rejections)
        self.rejections = dict(counts)


@dataclass(frozen=True)
class Found:
    configuration: Configuration
    cost: float
    stats: SearchStats


@dataclass(frozen=True)
class NotFound:
    stats: SearchStats


SelectionOutcome = Union[Found, NotFound]


@dataclass
class _PartitionResult:
    best: Optional[Configuration]
    best_cost: float
    stats: SearchStats


def _search_candidates(
    catalog: Sequence[Component],
    requirements: Requirements,
    chain_length: int,
    index_tuples: Iterable[IndexTuple],
    on_candidate: Optional[Callable[[], None]] = None,
) -> _PartitionResult:
    """
    Fold over index tuples, keeping the cheapest feasible chain.

    Only a strictly lower cost replaces the current best, so among equal
    costs the first tuple in iteration order is kept.
    """
    required = frozenset(indices_of_kind(catalog, requirements.required_kind))
    stats = SearchStats()
    rejections: Counter = Counter()
    best: Optional[Configuration] = None
    best_cost = float("inf")

    for idx in index_tuples:
        stats.candidates_total += 1
        if on_candidate is not None:
            on_candidate()

        if required.isdisjoint(idx):
            continue

        components = tuple(catalog[i] for i in idx)
        stats.candidates_evaluated += 1
        evaluation = evaluate_configuration(
            components,
            requirements.required_gain_db,
            requirements.max_leakage_db,
            requirements.max_power_dbm,
            chain_length=chain_length,
        )
        if not evaluation.feasible:
            rejections[evaluation.reason.value] += 1
            logger.debug(
                "Chain %s rejected (%s): gain %.2f dB, leakage %.3f dB",
                idx,
                evaluation.reason.value,
                evaluation.total_gain_db,
                evaluation.total_leakage_db,
            )
            continue

        stats.feasible += 1
        config = Configuration(indices=tuple(idx), components=components)
        cost = config.total_cost
        if cost < best_cost:
            best, best_cost = config, cost

    stats.rejections = dict(rejections)
    return _PartitionResult(best=best, best_cost=best_cost, stats=stats)


def _search_partition(
    catalog: Tuple[Component, ...],
    requirements: Requirements,
    chain_length: int,
    first_index: int,
) -> _PartitionResult:
    """Worker entry point: sweep every chain whose first stage is catalog[first_index]."""
    return _search_candidates(
        catalog,
        requirements,
        chain_length,
        iter_index_tuples(len(catalog), chain_length, first_index=first_index),
    )


def _merge_partitions(results: Sequence[_PartitionResult]) -> _PartitionResult:
    """
    Combine per-partition bests. results must be ordered by first index so
    the strict '<' keeps the lexicographically earliest chain on ties.
    """
    stats = SearchStats()
    best: Optional[Configuration] = None
    best_cost = float("inf")
    for res in results:
        stats.merge(res.stats)
        if res.best is not None and res.best_cost < best_cost:
            best, best_cost = res.best, res.best_cost
    return _PartitionResult(best=best, best_cost=best_cost, stats=stats)


class ChainPlanner:
    """
    Brute-force search for the cheapest feasible signal chain.
    """

    def __init__(self, cfg: SelectionConfig, progress: ProgressReporter | None = None):
        self.cfg = cfg
        self.progress = progress or NullProgressReporter()

    @property
    def n_candidates(self) -> int:
        return len(self.cfg.catalog) ** self.cfg.settings.chain_length

    def _run_sequential(self) -> _PartitionResult:
        cfg = self.cfg
        self.progress.start("Evaluating candidate chains", total=self.n_candidates)
        res = _search_candidates(
            cfg.catalog,
            cfg.requirements,
            cfg.settings.chain_length,
            iter_index_tuples(len(cfg.catalog), cfg.settings.chain_length),
            on_candidate=self.progress.advance,
        )
        self.progress.end()
        return res

    def _run_parallel(self) -> _PartitionResult:
        cfg = self.cfg
        n_parts = len(cfg.catalog)
        by_first: Dict[int, _PartitionResult] = {}

        self.progress.start("Evaluating candidate partitions", total=n_parts)
        with ProcessPoolExecutor() as ex:
            futures = {
                ex.submit(
                    _search_partition,
                    cfg.catalog,
                    cfg.requirements,
                    cfg.settings.chain_length,
                    first,
                ): first
                for first in range(n_parts)
            }
            for fut in as_completed(futures):
                by_first[futures[fut]] = fut.result()
                self.progress.advance()
        self.progress.end()

        return _merge_partitions([by_first[i] for i in sorted(by_first)])

    def run(self) -> SelectionOutcome:
        """
        1. Generate every ordered chain of settings.chain_length catalog
           entries (repetition allowed).
        2. Drop chains without requirements.required_kind.
        3. Validate the rest; keep the cheapest feasible chain, earliest on ties.
        """
        cfg = self.cfg
        if cfg.settings.parallel and len(cfg.catalog) > 1:
            res = self._run_parallel()
        else:
            res = self._run_sequential()

        logger.info(
            "Searched %d chains (%d with a %s): %d feasible, rejections %s",
            res.stats.candidates_total,
            res.stats.candidates_evaluated,
            cfg.requirements.required_kind.label,
            res.stats.feasible,
            res.stats.rejections,
        )

        if res.best is None:
            logger.warning(
                "No feasible configuration: no %d-stage chain containing a %s "
                "meets %.1f dB gain and %.3f dB leakage.",
                cfg.settings.chain_length,
                cfg.requirements.required_kind.label,
                cfg.requirements.required_gain_db,
                cfg.requirements.max_leakage_db,
            )
            return NotFound(stats=res.stats)

        return Found(configuration=res.best, cost=res.best_cost, stats=res.stats)


def select_cheapest_configuration(
    catalog: Sequence[Component],
    requirements: Requirements | None = None,
    chain_length: int = DEFAULT_CHAIN_LENGTH,
) -> SelectionOutcome:
    """Convenience wrapper: sequential search with no progress output."""
    cfg = SelectionConfig(
        catalog=tuple(catalog),
        requirements=requirements or Requirements(),
        settings=SearchSettings(chain_length=chain_length),
    )
    return ChainPlanner(cfg).run()
