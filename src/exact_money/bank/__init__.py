"""Currency exchange: the Bank protocol and its implementations."""
