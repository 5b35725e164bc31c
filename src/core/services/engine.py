"""Engine wiring.

Builds the object graph once per process: program registry, proxy
selector, HTTP eligibility client, the single resolution queue and the batch
resolver on top of it. Entry points (CLI, bots, tests) share one engine so
that all lookups go through the same queue.
"""

from __future__ import annotations

from dataclasses import dataclass

from adapters.eligibility_client import EligibilityClient
from adapters.http_client import ClientFactory
from adapters.proxy_selector import ProxySelector
from core.config import AppSettings
from core.domain.models import EligibilityReport
from core.domain.programs import ProgramRegistry
from core.resources_loader import load_program_registry, load_proxy_strings
from core.services.batch_resolver import BatchResolver, ResolveHooks
from core.services.resolution_queue import ResolutionQueue


@dataclass
class EligibilityEngine:
    settings: AppSettings
    programs: ProgramRegistry
    proxy_selector: ProxySelector
    client: EligibilityClient
    queue: ResolutionQueue
    resolver: BatchResolver

    async def check(
        self,
        program_name: str,
        addresses: list[str],
        *,
        hooks: ResolveHooks | None = None,
    ) -> EligibilityReport:
        program = self.programs.get(program_name)
        return await self.resolver.resolve(program, addresses, hooks=hooks)


def build_engine(
    settings: AppSettings | None = None,
    *,
    programs: ProgramRegistry | None = None,
    proxies: list[str] | None = None,
    factory: ClientFactory | None = None,
) -> EligibilityEngine:
    settings = settings or AppSettings()
    registry = programs if programs is not None else load_program_registry(settings)
    proxy_list = proxies if proxies is not None else (load_proxy_strings(settings) if settings.use_proxy else [])
    selector = ProxySelector(proxy_list)
    client = EligibilityClient(settings, proxy_selector=selector, factory=factory)
    queue = ResolutionQueue(client)
    resolver = BatchResolver(queue, max_addresses=settings.max_addresses)
    return EligibilityEngine(
        settings=settings,
        programs=registry,
        proxy_selector=selector,
        client=client,
        queue=queue,
        resolver=resolver,
    )
