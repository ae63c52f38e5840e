from beartype import BeartypeConf, BeartypeStrategy, beartype

bear_enforce = beartype(conf=BeartypeConf(strategy=BeartypeStrategy.O1))
"""Check argument types on every call."""

bear_spray = beartype(conf=BeartypeConf(strategy=BeartypeStrategy.O0))
"""Skip type checking, for callables generic over the tracked item type."""
