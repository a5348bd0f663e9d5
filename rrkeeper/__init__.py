"""RoundRobinKeeper: round-robin pairings, score totals and a resumable session."""
