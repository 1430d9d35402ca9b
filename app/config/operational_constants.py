"""
Operational constants for 40 Acres.

Technical constants for background jobs: lock timeouts, task time
limits and batch sizes.
"""

# =============================================================================
# LOCK TIMEOUTS (seconds)
# =============================================================================
# Used by app.utils.redis_utils.job_lock

# Batch jobs (withdrawal payouts, lock-up release)
LOCK_TIMEOUT_LONG = 300


# =============================================================================
# DRAMATIQ TASK TIME LIMITS (milliseconds)
# =============================================================================

# Standard tasks (5 minutes) - most background jobs
DRAMATIQ_TIME_LIMIT_STANDARD = 300_000


# =============================================================================
# BATCH SIZES
# =============================================================================

# Accounts checked per lock-up release run
LOCKUP_RELEASE_BATCH_SIZE = 200
