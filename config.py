# Global knobs (ingest + well-clear logic thresholds)
FT_TO_M = 0.3048

# Ownship entity id (bound at startup, see run.py --ownship)
OWNSHIP_ID = 1

# Reported airspeed vs |(u, v, w)| mismatch tolerance (m/s)
AIRSPEED_TOLERANCE_MPS = 1e-6

# ---------------------------------------------------------------------
# Well-clear volume (WCV_TAUMOD, DAIDALUS-style defaults)
#   DTHR  horizontal distance threshold
#   ZTHR  vertical distance threshold
#   TTHR  modified tau threshold
#   TCOA  time to co-altitude threshold
# ---------------------------------------------------------------------
DTHR_M = 4000.0 * FT_TO_M      # ≈ 1219 m (0.66 NM)
ZTHR_M = 450.0 * FT_TO_M       # ≈ 137 m
TTHR_S = 35.0
TCOA_S = 0.0

# Predictions further out than this are reported as "no violation" (inf)
LOOKAHEAD_S = 180.0

# Mean earth radius used for the local east/north projection (m)
EARTH_RADIUS_M = 6371000.0

# ---------------------------------------------------------------------
# Staleness: None keeps every aircraft forever (last-known state is
# reused until overwritten). A number evicts traffic whose last sample
# is older than this many seconds behind the newest sample.
# ---------------------------------------------------------------------
MAX_STATE_AGE_S = None

# Per-cycle CSV log (None disables)
LOG_PATH = "logs/wcv_log.csv"

# Simulation step for scenario playback (s)
DT = 1.0


def get_wcv_thresholds(dthr_m=None, zthr_m=None, tthr_s=None, tcoa_s=None,
                       lookahead_s=None):
    """Return WCV thresholds, falling back to module defaults."""
    return {
        "dthr_m": DTHR_M if dthr_m is None else dthr_m,
        "zthr_m": ZTHR_M if zthr_m is None else zthr_m,
        "tthr_s": TTHR_S if tthr_s is None else tthr_s,
        "tcoa_s": TCOA_S if tcoa_s is None else tcoa_s,
        "lookahead_s": LOOKAHEAD_S if lookahead_s is None else lookahead_s,
    }
