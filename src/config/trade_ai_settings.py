"""
Centralized Trade AI Settings

Simple True/False toggles for the AI trade proposal system.
Change these settings to speed up simulations or make runs reproducible.
"""


class TradeAISettings:
    """
    Trade AI controls.

    True  = SKIP (faster, for testing)
    False = RUN NORMALLY (realistic, for gameplay)
    """

    # ================================================================
    # CHANGE THESE TO SPEED UP SIMULATIONS
    # ================================================================

    SKIP_TRANSACTION_AI = False
    # True:  Skip AI proposal generation on day advance
    # False: Every AI team gets a chance to propose each cycle

    SKIP_DEADLINE_EVENTS = False
    # True:  No deadline approaching/passed announcements
    # False: Announce and expire pending proposals at the deadline

    # ================================================================
    # DIAGNOSTICS
    # ================================================================

    DEBUG_MODE = False
    # True:  Collect per-team probability rolls and stage outcomes in the cycle result
    # False: Cycle result carries counts only

    RANDOM_SEED = None
    # None:  Non-deterministic draws (production)
    # int:   Same campaign + date + seed always yields the same proposals
