"""Embeds bounded context: failures and the resolver port."""
