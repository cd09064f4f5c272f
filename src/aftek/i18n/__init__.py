"""Multi-language content: locale dictionaries, translation catalog and auditing."""
