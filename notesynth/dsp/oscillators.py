"""
Sine partial generator with phase reset at note start.
Partials always begin at phase 0 so layered harmonics stay phase-aligned.
"""

import torch
import numpy as np


class Oscillator:
    @staticmethod
    def sine(frequency: float, num_samples: int, sample_rate: int, phase: float = 0.0) -> torch.Tensor:
        """
        Generates num_samples of a sine wave starting at t=0.

        Args:
            frequency: Frequency (Hz)
            num_samples: Number of samples to generate (<= 0 gives an empty tensor)
            sample_rate: Sample rate
            phase: Initial phase offset (radians)

        Returns:
            float64 tensor, sample i taken at t = i * (1 / sample_rate)
        """
        t = torch.arange(max(num_samples, 0), dtype=torch.float64) * (1.0 / sample_rate)
        return torch.sin(2 * np.pi * frequency * t + phase)
