import numpy as np
import matplotlib.pyplot as plt

from hdi_tools import density_estimate, hdi_from_samples

# Two well separated modes: a single interval would cover the trough.
rng = np.random.default_rng(0)
n = 10000
first = rng.random(n) < 0.6
samples = np.where(first, rng.normal(1.5, 0.5, n), rng.normal(4.75, 0.5, n))

regions = hdi_from_samples(samples, 0.95)
for mode, lower, upper in regions:
    print(f"mode {mode:.3f}  HDI [{lower:.3f}, {upper:.3f}]")
print("total mass:", sum(r.mass for r in regions))

est = density_estimate(samples)
fig, ax = plt.subplots()
ax.hist(samples, bins=80, density=True, color="0.8")
ax.plot(est.x, est.density, "k-", label="KDE")
for r in regions:
    mask = (est.x >= r.lower) & (est.x <= r.upper)
    ax.fill_between(est.x[mask], est.density[mask], alpha=0.4, color="C0")
    ax.axvline(r.mode, color="C0", ls=":")
ax.set_xlabel("x")
ax.legend()
plt.show()
