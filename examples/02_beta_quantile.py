import numpy as np
import matplotlib.pyplot as plt
import scipy.stats

from hdi_tools import distributions, find_hdi

# A plain quantile function plus its parameters, forwarded unchanged.
hdi = find_hdi(scipy.stats.beta.ppf, 0.95, 1e-8, 30, 12)
print("beta(30, 12) HDI:", hdi)

# The same distribution through the family registry.
dist = distributions.beta(30, 12)
print("registry:", find_hdi(dist))
print("density at the ends:", dist.pdf(hdi.lower), dist.pdf(hdi.upper))

# Skewed distributions: the HDI is narrower than the equal-tailed interval.
for width in (0.5, 0.8, 0.95):
    h = find_hdi(dist, width)
    qi = dist.ppf([(1 - width) / 2, (1 + width) / 2])
    print(f"{width:.2f}: HDI width {h.width:.4f}  equal-tailed width {qi[1] - qi[0]:.4f}")

x = np.linspace(0.4, 0.95, 400)
fig, ax = plt.subplots()
ax.plot(x, dist.pdf(x), "k-")
mask = (x >= hdi.lower) & (x <= hdi.upper)
ax.fill_between(x[mask], dist.pdf(x[mask]), alpha=0.3, label="95% HDI")
ax.set_xlabel(r"$\theta$")
ax.set_ylabel(r"$p(\theta)$")
ax.legend()
plt.show()
