"""Evolution and generation-loop constants."""

# Mutation (percent chance per gene, uniform delta half-width)
DEFAULT_MUTATION_FACTOR = 1.0
DEFAULT_MUTATION_CHANCE = 10.0

# Sensing/locomotion trade-off applied when a gene grows
SIGHT_INFLUENCE_ON_SPEED = 0.0625
SPEED_INFLUENCE_ON_SIGHT = 0.125

# Generation loop
DEFAULT_SIMULATION_INTERVAL = 30.0  # Simulated seconds per generation
DEFAULT_RESEED_VALUE = 6
DEFAULT_PARENT_SIZE = 5
DEFAULT_COHORT_SIZE = 20
DEFAULT_PREY_COHORT_SIZE = 40
GENERATION_HISTORY_LIMIT = 100

# Interaction payoffs
PREDATOR_A_PREY_PAYOFF = 2.0
PREDATOR_A_PREDATOR_B_PAYOFF = -100.0
PREDATOR_B_PREY_PAYOFF = 0.1
PREDATOR_B_PREDATOR_A_PAYOFF = 5.0
