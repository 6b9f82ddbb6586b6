"""Adversary AI: policies and the per-tick controller."""

from gridchase.ai.controller import AdversaryController
from gridchase.ai.policies import POLICIES, AdversaryPolicy, PursuitPolicy, WanderPolicy

__all__ = ["AdversaryController", "AdversaryPolicy", "POLICIES", "PursuitPolicy", "WanderPolicy"]
