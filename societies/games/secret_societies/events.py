"""
Event Cards - Round events rotated in from the event deck.

Round 1 never has an active event; from round 2 the upcoming event
becomes active and a new upcoming event is drawn.
"""

from .definitions import EventCard


EVENT_CARDS: list[EventCard] = [
    EventCard(
        "ev1",
        "The Last Confession",
        "If a Secret is targeted by a Reveal action this round, it is discarded "
        "(returned to the bottom of its Zone Deck) immediately after its Reveal Effect resolves.",
    ),
    EventCard(
        "ev2",
        "Distraction",
        "When a Secret is Exploited return it to the hand. "
        "(A Mask cannot Exploit more than one Secret in a turn)",
    ),
    EventCard(
        "ev3",
        "Royal Protection",
        "Players Gain Immunity (Gold Loss) and Immunity (Gold Steal) this round.",
    ),
    EventCard(
        "ev4",
        "Whispers Amplified",
        "For this round, the first Reveal action taken by each player costs only 1 Information. "
        "Any subsequent Reveal actions taken by any player this round cost 2 Information "
        "(instead of the standard 3).",
    ),
    EventCard(
        "ev5",
        "False Allegations",
        "Discard any number of Secrets from your hand. For each Secret discarded, draw 1 Secret "
        "(and add it to your hand) from any Zone Deck(s) of your choice "
        "(excluding the Royal Chamber Zone Deck).",
    ),
    EventCard(
        "ev6",
        "Blackmail",
        "Each player Must Pay 1 Gold per Secret currently in their hand. If unable to Pay the "
        "full amount, they Must discard Secrets (of their choice) until they can afford to Pay "
        "1 Gold for each remaining Secret.",
    ),
    EventCard(
        "ev7",
        "Courtly Feast",
        "Each player May choose to Gain 3 Gold or 1 Trust. Players Must choose one.",
    ),
    EventCard(
        "ev8",
        "Foreign Envoys",
        "Draw an additional Victory Condition card. You now have two Victory Conditions; "
        "fulfilling either wins you the game (following standard precedence rules).",
    ),
    EventCard(
        "ev9",
        "Signs of Intrusion",
        "If you currently have two Victory Conditions, you Must choose and discard one.",
    ),
    EventCard(
        "ev10",
        "Another Mask",
        "For this round, each player May Exploit a Secret in the temporary Eclipse Mask slot in "
        "addition to their normal limit of 3 Exploited Secrets (using Lunar, Solar, Shadow Masks). "
        "This allows a potential total of 4 Exploited Secrets this round if the Eclipse Mask slot "
        "is used. The Eclipse Mask functions like a standard Mask and can be targeted by Reveal actions.",
    ),
]
