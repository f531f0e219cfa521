from __future__ import annotations

import time
from typing import Any

from referral_network.core.context import NetworkContext, NetworkView
from referral_network.core.exceptions import PipelineError, ReferralNetworkError
from referral_network.filters.criteria import FilterMode
from referral_network.filters.engine import filter_forest
from referral_network.forest.builder import build_forest
from referral_network.records.normalizer import normalize_records
from referral_network.search.spotlight import spotlight_search
from referral_network.stats.aggregator import aggregate


class NetworkPipeline:
    """
    Orchestrates raw records -> forest -> {filter -> stats, search}.
    No business logic lives here.
    """

    def __init__(self, context: NetworkContext):
        self.ctx = context
        self.log = context.logger

    def run(self, raw_records: Any) -> NetworkView:
        self.log.info("Pipeline starting")
        timings = {}

        try:
            t0 = time.perf_counter()
            members = normalize_records(raw_records, config=self.ctx.config)
            forest = build_forest(members, cycle_policy=self.ctx.cycle_policy)
            timings["build"] = time.perf_counter() - t0

            mode = FilterMode.parse(self.ctx.mode)
            t0 = time.perf_counter()
            roots = filter_forest(forest.roots, self.ctx.criteria, mode)
            stats = aggregate(roots)
            search = spotlight_search(roots, self.ctx.query)
            timings["derive"] = time.perf_counter() - t0

            self.log.info(
                "Pipeline completed successfully: users=%d roots=%d hits=%s",
                stats.total_users,
                len(roots),
                "-" if search.results is None else len(search.results),
            )

            return NetworkView(
                forest=forest,
                roots=roots,
                search=search,
                stats=stats,
                mode=mode,
                timings=timings,
            )

        except ReferralNetworkError:
            self.log.exception("Pipeline execution failed")
            raise

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise PipelineError(str(exc)) from exc
