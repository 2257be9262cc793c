from hdi_tools import distributions, find_hdi

# 95% HDI of the standard normal: the familiar +/- 1.96.
hdi = find_hdi(distributions.normal(0.0, 1.0), width=0.95)
print(hdi)

lower, upper, mass = hdi
print(f"{mass:.0%} HDI: [{lower:.6f}, {upper:.6f}], width {hdi.width:.6f}")

# Same thing via the equal-density root finder.
print(find_hdi(distributions.normal(), 0.95, backend="scipy.brentq"))
