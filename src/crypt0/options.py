from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Options:
    # the return-type scan of a function body also looks into if/while bodies
    scan_nested_returns: bool = False
    # declarations inside if/while bodies do not outlive the body
    block_scope: bool = False

    @staticmethod
    def default() -> Options:
        return Options()

    def with_scan_nested_returns(self, enabled: bool = True) -> Options:
        return dataclasses.replace(self, scan_nested_returns=enabled)

    def with_block_scope(self, enabled: bool = True) -> Options:
        return dataclasses.replace(self, block_scope=enabled)
