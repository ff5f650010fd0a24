"""Genetics package: the heritable parameter vector of an agent."""

from huntsim.genetics.genome import AgentGenome, GenePair

__all__ = ["AgentGenome", "GenePair"]
