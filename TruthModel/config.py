from dataclasses import dataclass


@dataclass
class EMParams:
    """
    Training parameters shared by the noisy-channel models.

    max_rounds:     bound on outer (and inner) EM rounds; 0 means unbounded
    tolerance:      stop once a round improves the log score by no more
    soft_inputs:    feed posterior probabilities, not 0/1, to the M-step
    initial_noise:  noise rate given to channels created on first use
    noise_floor:    noise rates are clamped to [floor, 1 - floor]
    soft_floor:     soft input scores are clamped to [floor, 1 - floor]
    """
    max_rounds: int = 0
    tolerance: float = 1e-3
    soft_inputs: bool = True
    initial_noise: float = 1e-3
    noise_floor: float = 1e-3
    soft_floor: float = 1e-6
