"""Physical constants (SI unless noted) and unit conversions."""

import math

G = 6.674e-11  # m^3 kg^-1 s^-2
C = 2.998e8  # m/s
HBAR = 1.055e-34  # J s
K_B = 1.381e-23  # J/K
SIGMA_SB = 5.670e-8  # W m^-2 K^-4
EPSILON_0 = 8.854e-12  # F/m

M_SUN = 1.989e30  # kg
R_SUN_KM = 6.957e5
L_SUN_W = 3.828e26
L_SUN_ERG = 3.828e33  # erg/s
T_SUN = 5772.0  # K

ERG_PER_JOULE = 1e7
SECONDS_PER_YEAR = 3.156e7
SECONDS_PER_DAY = 86400.0
KM_PER_AU = 1.496e8
KM_PER_PC = 3.086e13
KM_PER_KPC = 3.086e16
KM_PER_MPC = 3.086e19
CM_PER_PC = 3.086e18

HUBBLE_CONSTANT = 70.0  # km/s/Mpc
C_KMS = 299792.458
UNIVERSE_AGE_GYR = 13.8

# Eddington luminosity per solar mass, erg/s
EDDINGTON_PER_SOLAR_MASS = 1.26e38
# G in kpc (km/s)^2 / M☉
G_KPC = 4.3e-6
# Surface gravity of the Sun, cm/s^2
G_SUN_CGS = 27400.0

FOUR_PI = 4 * math.pi


def luminosity_distance_flux(luminosity: float, distance_cm: float) -> float:
    """Isotropic flux at a distance; infinite at zero distance for nonzero luminosity."""
    if distance_cm <= 0:
        return float("inf") if luminosity > 0 else 0.0
    return luminosity / (FOUR_PI * distance_cm**2)
