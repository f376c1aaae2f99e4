"""Explain My Card: plain-language explanations and synergies for Magic cards."""
