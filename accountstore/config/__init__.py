"""Client configuration for AccountStore."""
