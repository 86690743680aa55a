from .simulate_p_values import simulate_p_values

__all__ = ["simulate_p_values"]
