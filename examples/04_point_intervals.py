import numpy as np

from hdi_tools import format_point_intervals, hdi_of_samples, mean_qi, median_qi, mode_hdi

rng = np.random.default_rng(1)
# Right-skewed "posterior" draws.
draws = rng.gamma(2.0, 1.5, size=20000)

print(format_point_intervals(mode_hdi(draws, [0.5, 0.95])))
print()
print(format_point_intervals(median_qi(draws, 0.95)))
print()
print(format_point_intervals(mean_qi(draws, 0.95)))
print()
print("sorted-draw HDI:", hdi_of_samples(draws, 0.95))
