"""
Per-exchange symbol translation tables.
"""
from typing import Dict, Iterable, Mapping, Optional


class SymbolMap:
    """
    Immutable mapping from a base asset (BTC) to an exchange market code.

    Built once per connector. Pairs missing from the table are unsupported
    on that exchange.
    """

    def __init__(self, table: Mapping[str, str]):
        codes: Dict[str, str] = {}
        for pair, code in table.items():
            pair = pair.strip().upper()
            code = code.strip() if isinstance(code, str) else code
            if not pair:
                raise ValueError("Empty pair in symbol table")
            if not code or not isinstance(code, str):
                raise ValueError(f"Empty market code for {pair}")
            codes[pair] = code
        self._codes = codes

    @classmethod
    def from_template(cls, pairs: Iterable[str], template: str) -> "SymbolMap":
        """Build a table by formatting every pair into a template like '{base}USDT'."""
        return cls({pair: template.format(base=pair.upper()) for pair in pairs})

    def supports(self, pair: str) -> bool:
        return pair.upper() in self._codes

    def code_for(self, pair: str) -> Optional[str]:
        """Market code for a pair, None when the exchange does not list it."""
        return self._codes.get(pair.upper())

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, pair: str) -> bool:
        return self.supports(pair)

    def __repr__(self) -> str:
        return f"SymbolMap({len(self._codes)} pairs)"
