"""Scheduled-message delivery: policy types, eligibility engine and the check-delivery use case."""
