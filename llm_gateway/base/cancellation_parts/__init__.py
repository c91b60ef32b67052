"""Cancellation implementation modules (see ``llm_gateway.base.cancellation``)."""
