from swisstour.pairing.swiss import SwissPairingService, matchups_from_matches

__all__ = ["SwissPairingService", "matchups_from_matches"]
