"""Domain service base."""


class Service:
    """Marker base for Haven domain services.

    A service owns the rules that span aggregates, such as a referral link
    touching two users and a contact list, and talks to storage only
    through repository interfaces.
    """
