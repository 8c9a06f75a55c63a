"""
Secret Cards - The secret card catalog, grouped by zone.

Each zone holds five commons, two rares and one exotic. The two Town
Squares share one set of card text under zone-specific ids. Copy counts
follow rarity (Common x3, Rare x2, Exotic x1) unless a card says otherwise.
"""

from dataclasses import replace

from .definitions import SecretCard, Rarity, DEFAULT_COPIES
from .zones import (
    ROYAL_CHAMBER,
    CATHEDRAL,
    COURTYARD,
    TRADING_BAILEY,
    DOCKS_AND_GATES,
    EASTERN_TOWN_SQUARE,
    WESTERN_TOWN_SQUARE,
)


def _secret(
    card_id: str,
    name: str,
    rarity: Rarity,
    exploit: str,
    reveal: str,
    flavor: str = "",
    copies: int | None = None,
) -> SecretCard:
    """Define a card before it is placed in a zone."""
    return SecretCard(
        id=card_id,
        name=name,
        zone="",
        rarity=rarity,
        exploit_effect=exploit,
        reveal_effect=reveal,
        flavor=flavor,
        copies=copies if copies is not None else DEFAULT_COPIES[rarity],
    )


def _place(zone: str, cards: list[SecretCard], prefix: str | None = None) -> list[SecretCard]:
    """Assign cards to a zone, optionally re-prefixing their ids."""
    placed = []
    for card in cards:
        card_id = card.id
        if prefix:
            card_id = f"{prefix}_{card.id.split('_', 1)[1]}"
        placed.append(replace(card, id=card_id, zone=zone))
    return placed


# --- Docks and Gates ---
_DOCKS_AND_GATES = [
    _secret(
        "dg_common1",
        "Port Authority Bribe",
        Rarity.COMMON,
        exploit="Gain 2 Gold. You May Adjust Suspicion by 1.",
        reveal="The Revealing Player Must Steal 2 Gold from you. You Lose 2 Gold. The Revealing Player Must Raise Suspicion by 1.",
        flavor="Pay a small fee to ensure smooth passage through the busy docks, with a promise of discretion from those in power.",
    ),
    _secret(
        "dg_common2",
        "Coastal Spy",
        Rarity.COMMON,
        exploit="Gain 1 Information. You May Pay 1 Gold to Gain Insight on 1 target Secret in an opponent's hand. If it is a Common Secret, you May Use its Exploitation effect OR you may Pay 2 Information to Conceal and Delay this Secret.",
        reveal="The Revealing Player chooses: You Lose 3 Information, OR you Lose 1 Trust.",
        flavor="A network of eyes along the coastline, exchanging secrets for favors, always watching for the right moment to strike.",
    ),
    _secret(
        "dg_common3",
        "Shipment Delay",
        Rarity.COMMON,
        exploit="You Must Steal 1 Gold from one target player. Apply Delay to one target opponent's Exploited Secret.",
        reveal="Discard 1 Secret from your hand. Apply Delay to this Secret.",
        flavor="A whispered word at the docks causes the cargo to be 'misplaced'—a Delay that benefits those who know how to use it.",
    ),
    _secret(
        "dg_common4",
        "Smuggler's Network",
        Rarity.COMMON,
        exploit="Steal 2 Gold from one target player. You May Raise Suspicion by 1.",
        reveal="Lose 1 Gold. Lose 1 Trust. The Revealing Player Must Raise Suspicion by 1.",
        flavor="Hidden routes and Secret deals flow through the shadows, where gold changes hands and laws are forgotten.",
        copies=1,
    ),
    _secret(
        "dg_common5",
        "Pirates' Location",
        Rarity.COMMON,
        exploit="Pay 1 Gold to Gain 1 Information. Each other player Must choose one: Lose 1 Gold OR Lose 1 Information.",
        reveal="Lose 1 Trust.",
        flavor="A map passed down through whispers, leading to treasures hidden in dangerous waters, where only the brave dare venture.",
    ),
    _secret(
        "dg_rare1",
        "The Hidden Sail",
        Rarity.RARE,
        exploit="Gain the Ability to: Sell Secrets from your hand for 4 Gold each, or your Exploited Secrets for 2 Gold each, until your next turn. Sold Secrets are Discarded.",
        reveal="Discard this Secret. Discard 1 additional Secret from your hand. The Revealing Player May Raise Suspicion by 2.",
        flavor="A discreet vessel waits in the harbor, ready to sail into the unknown, unseen by those who seek to control the tides.",
    ),
    _secret(
        "dg_rare2",
        "Merchant's Letter",
        Rarity.RARE,
        exploit="Gain 3 Gold. Gain Insight on 2 target Secrets in opponents' hands (can belong to the same or different opponents). You May Exchange the positions of those 2 Secrets.",
        reveal="Discard 1 Secret from your hand. Lose 2 Trust.",
        flavor="A letter sealed with wax, promising trade secrets and untold riches—but only for those willing to honor the unspoken agreements.",
    ),
    _secret(
        "dg_exotic1",
        "Whispers of the Tide",
        Rarity.EXOTIC,
        exploit="Gain 2 Gold. Gain 2 Information. You May immediately perform 1 Reveal action targeting any Mask (Pay no Information cost for this action).",
        reveal="Lose 3 Trust. Choose 1 adjacent Exploited Secret you control: Immediately trigger its Reveal Effect (The Revealing Player chooses any options within the triggered effect; the target Secret cannot be Discarded instead of triggering unless specified by its own effect or an Event).",
        flavor=" The waves carry secrets, and soon, they’ll reach the ears they’re meant for.",
    ),
]


# --- Town Squares (shared text) ---
_TOWN_SQUARE_TEMPLATE = [
    _secret(
        "ts_common1",
        "Common Gossip",
        Rarity.COMMON,
        exploit="Adjust Suspicion by 2.",
        reveal="The Revealing Player Gains Insight on one Secret in your hand. The Revealing Player chooses: Apply Delay to this Secret OR the Revealing Player May Pay 2 Gold to Steal this Secret.",
        flavor="A rumor spreads through the market, but its true weight is yet to be felt.",
    ),
    _secret(
        "ts_common2",
        "Merchant's Offer",
        Rarity.COMMON,
        exploit="Gain 2 Gold. If your Trust is 10 or higher, you May Pay 1 Gold to Gain Immunity (Gold Steal).",
        reveal="Discard this Secret and Lose Immunity (Gold Steal).",
        flavor="A tempting offer, but there's always a price to pay for convenience.",
    ),
    _secret(
        "ts_common3",
        "Tavern Brawl",
        Rarity.COMMON,
        exploit="Immediately perform 1 Reveal action targeting the Mask this Secret is assigned to (Pay no Information cost for this action). This Secret is not affected by this Reveal action.",
        reveal="Lose 3 Gold.",
        flavor="A fight erupts, and with it, secrets are exposed in the chaos.",
    ),
    _secret(
        "ts_common4",
        "Old Friend in the Square",
        Rarity.COMMON,
        exploit="Gain Insight on the top 3 Secrets of any one target Zone Deck. You May Exchange 1 of those Secrets with 1 Secret from your hand (both Secrets must belong to the same Zone).",
        reveal="Lose 1 Gold and Lose 1 Trust, OR Discard this Secret.",
        flavor="Old alliances are tested when familiar faces cross paths in the square.",
    ),
    _secret(
        "ts_common5",
        "City Watch",
        Rarity.COMMON,
        exploit="You May Adjust Suspicion by 1. You May Pay 1 Gold to Gain 1 Trust and May Adjust Suspicion by 1 again.",
        reveal="Lose 1 Gold. Lose 1 Trust. Lose 1 Information.",
        flavor="The watchful eyes of the city never miss a coin or a secret.",
    ),
    _secret(
        "ts_rare1",
        "The Informant",
        Rarity.RARE,
        exploit="Gain the ability to: Pay 1 Gold to Must Steal 2 Information from any target player.",
        reveal="The Revealing Player Must Steal 2 Information from you. Discard this Secret.",
        flavor="Whispers in the dark corners can reveal more than any royal decree.",
    ),
    _secret(
        "ts_rare2",
        "Ambush in the Alley",
        Rarity.RARE,
        exploit="Apply Delay to all other Secrets currently Exploited on the same Mask as this Secret.",
        reveal="Lose 1 Trust. Discard this Secret. The Revealing Player Must Raise Suspicion by 1.",
        flavor="The shadows conceal a dagger's strike — your trust betrayed in silence",
    ),
    _secret(
        "ts_exotic1",
        "Bribed Guards",
        Rarity.EXOTIC,
        exploit="Pay 2 Gold to Draw 3 Secrets from your current Zone Deck. Choose 2 Secrets to Keep and Discard the third. You May Adjust Suspicion by 2.",
        reveal="You Must Lose 3 Gold and Lose 2 Trust. If you cannot Lose the full 3 Gold, you Must Lose 1 additional Trust instead.",
        flavor="A few coins in the right hands can silence the watchful eyes.",
    ),
]


# --- Trading Bailey ---
_TRADING_BAILEY = [
    _secret(
        "tb_common1",
        "Merchant's Favor",
        Rarity.COMMON,
        exploit="Move your character to an adjacent zone. Draw 2 Secrets from that zone's deck. You May Pay 1 Gold and 1 Information for each of these drawn Secrets you wish to Keep. Discard any drawn Secrets you do not Pay for.",
        reveal="The Revealing Player Gains this Secret's Exploitation effect and Steals this Secret from you.",
        flavor="A deal struck in the shadows, one that could tip the balance in your favor.",
    ),
    _secret(
        "tb_common2",
        "Courier's Trail",
        Rarity.COMMON,
        exploit="Draw 1 Secret from another bordering zone and Keep it.",
        reveal="Discard 1 Secret from your hand (the Revealing Player chooses which).",
        flavor="A hurried message left behind, revealing more than intended.",
    ),
    _secret(
        "tb_common3",
        "Trade Route Blockade",
        Rarity.COMMON,
        exploit="Gain 1 Gold for each player character (including yours) in your current zone and all adjacent zones. You May Move one target opponent's character to a zone adjacent to their current one.",
        reveal="Lose 3 Gold. The Revealing Player Moves your character to this zone or an adjacent zone.",
        flavor="The flow of goods is halted, and so too are your plans.",
    ),
    _secret(
        "tb_common4",
        "Market Gossip",
        Rarity.COMMON,
        exploit="Perform the Draw phase again, drawing only from the Trading Bailey deck.",
        reveal="Discard this Secret. Discard 1 additional Secret from your hand. If your character is in the Trading Bailey, Move your character to a different zone.",
        flavor="Whispers of deals and Secrets spread quickly in the crowded stalls.",
    ),
    _secret(
        "tb_common5",
        "Customs Inspection",
        Rarity.COMMON,
        exploit="Gain 1 Information. Gain Insight on one target Secret in another player's hand. If it is a Common Secret, Adjust Suspicion by 1; otherwise, Adjust Suspicion by 2.",
        reveal="The Revealing Player Steals 1 Trust from you. Discard this Secret. You cannot move your character during your next End of Turn phase.",
        flavor="A routine check reveals more than just the cargo.",
    ),
    _secret(
        "tb_rare1",
        "Smuggler's Shortcut",
        Rarity.RARE,
        exploit="Move your character to any zone. Draw 2 Secrets from that zone's deck. You May Use the Exploitation effect of one of those Secrets immediately, then Discard both.",
        reveal="The Revealing Player Gains Insight on all Secrets currently in your hand. Then, the Revealing Player Steals 1 Secret of their choice from your hand. If you have no Secrets in hand, the Revealing Player Draws 1 Secret from the deck corresponding to your character's current zone instead.",
        flavor="The shadows offer a quicker path, but danger lurks around every corner.",
    ),
    _secret(
        "tb_rare2",
        "Guild Alliance",
        Rarity.RARE,
        exploit="Gain Immunity (Gold Loss) and Immunity (Gold Steal) until your next turn. If another player's character is in your zone, you Must Steal 3 Gold from that player.",
        reveal="The Revealing Player Steals 2 Trust from you.",
        flavor="An agreement forged in shadows, bound by mutual interests and silent promises.",
    ),
    _secret(
        "tb_exotic1",
        "Golden Caravan",
        Rarity.EXOTIC,
        exploit="Gain 3 Gold. Move your character to any zone. Draw 1 Secret from any position in that zone's deck (without looking at the card faces first).",
        reveal="The Revealing Player Steals all your Gold. If the amount Stolen is less than 4, the Revealing Player Gains Gold from the supply until the total Gold gained from this effect is 4.",
        flavor="A convoy laden with wealth, where every stop hides a potential deal or betrayal.",
    ),
]


# --- Courtyard ---
_COURTYARD = [
    _secret(
        "cy_common1",
        "Noble Whisper",
        Rarity.COMMON,
        exploit="Choose one zone. Gain 2 Information for each player character (including yours) currently in that zone.",
        reveal="Exchange this Secret with the top Secret of the Courtyard deck. The Revealing Player May Adjust Suspicion by 1.",
        flavor="A quiet conversation in the shadows, where power is Exchanged in hushed tones.",
    ),
    _secret(
        "cy_common2",
        "Misplaced Loyalty",
        Rarity.COMMON,
        exploit="For each other Secret currently Exploited on the same Mask as this one, you Steal 2 Information from that Secret's owner.",
        reveal="The Revealing Player Must Steal one Exploited Secret of their choice from your Masks.",
        flavor="Their allegiance wavers, but the consequences of betrayal are yours to bear.",
    ),
    _secret(
        "cy_common3",
        "Hidden Pact",
        Rarity.COMMON,
        exploit="Gain 1 Trust. Each other player who has a Secret Exploited on the same Mask as this one May Pay you 1 Gold to Gain 1 Trust.",
        reveal="Apply Delay to this Secret. The Revealing Player Must Steal 1 Information from you.",
        flavor="A Secret agreement, forged in the shadows, waiting for the right moment to be revealed.",
    ),
    _secret(
        "cy_common4",
        "Hidden Grudge",
        Rarity.COMMON,
        exploit="Choose 2 players (you may choose yourself as one). Steal 1 Gold from each chosen player. Each chosen player May then choose to Pay 1 Gold OR Pay 2 Information; if they do, the other chosen player Loses 1 Trust. If neither chosen player Pays, you Gain 1 Trust.",
        reveal="Lose 1 Trust. The Revealing Player May Raise Suspicion by 1.",
        flavor="Beneath the smiles and pleasantries, an old rivalry brews, ready to erupt at the wrong moment.",
    ),
    _secret(
        "cy_common5",
        "Unwelcome Gift",
        Rarity.COMMON,
        exploit="Place this Secret on one of your Masks then choose one opponent. Move this Secret onto one of their empty Mask slots (it is now considered Exploited by them). (Note: This provides no beneficial effect to the opponent). That player May return this Secret to their hand during their Return Exploits phase by Paying an additional 2 Information.",
        reveal="Lose 2 Trust. Discard this Secret.",
        flavor="You didn't ask for it, but it's yours now.",
    ),
    _secret(
        "cy_rare1",
        "Extortion Bargain",
        Rarity.RARE,
        exploit="The next Common or Rare Secret you Exploit this turn becomes Concealed immediately after you Exploit it. (Using this Exploitation does not grant an extra Exploit slot).",
        reveal="The Mask slot this Secret was on cannot have Secrets Exploited onto it during your next Exploit Secrets phase. Discard this Secret.",
        flavor="A whispered threat can hold more power than a shouted command.",
    ),
    _secret(
        "cy_rare2",
        "Spy in the Shadows",
        Rarity.RARE,
        exploit="Gain 1 Information for each Secret currently Exploited on the board (including this one).",
        reveal="Choose one: Lose 2 Trust, OR Discard this Secret and Discard one additional Secret from your hand. The Revealing Player May Adjust Suspicion by 1.",
        flavor="A passing glance reveals more than words ever could.",
    ),
    _secret(
        "cy_exotic1",
        "The King’s Ear",
        Rarity.EXOTIC,
        exploit="Discard all Exploited Secrets except this one. End the Exploitation Phase.",
        reveal="You Must Discard 3 Secrets. First, Discard all Secrets from your hand (up to 3). If fewer than 3 Secrets were discarded from your hand, you Must Discard additional Exploited Secrets you control (you choose which, but you must include this Secret) until a total of 3 Secrets have been discarded.",
        flavor="A whisper to the throne carries more weight than a thousand voices.",
    ),
]


# --- Cathedral ---
_CATHEDRAL = [
    _secret(
        "cat_common1",
        "The Whispering Priest",
        Rarity.COMMON,
        exploit="Gain 1 Gold. Gain 1 Information. Choose 1 target Secret in an opponent's hand. Gain Insight on that Secret. Then, based on its rarity: If Common Secret, Gain 1 Gold OR 1 Information; If Rare Secret, Gain 2 Gold OR 2 Information; If Exotic Secret, Gain 3 Gold OR 3 Information.",
        reveal="Lose 2 Gold. Lose 2 Information. Discard this Secret.",
        flavor="Behind confessions lies a web of quiet influence.",
    ),
    _secret(
        "cat_common2",
        "Charity Dive",
        Rarity.COMMON,
        exploit="Pay 1 Gold to Gain 2 Trust.",
        reveal="The Revealing Player Must Steal 2 Gold and 1 Trust from you.",
        flavor="A generous hand reaches out, but who truly benefits from the gift?",
    ),
    _secret(
        "cat_common3",
        "Silent Witness",
        Rarity.COMMON,
        exploit="Gain 2 Information for each other Secret currently Exploited on the Mask where this Secret is placed.",
        reveal="Discard this Secret. The Revealing Player Steals 1 Information from you and Gains 1 additional Information from the supply.",
        flavor="Some truths are too dangerous to speak, but eyes cannot unsee.",
    ),
    _secret(
        "cat_common4",
        "Sanctuary Seal",
        Rarity.COMMON,
        exploit="Choose 1 other Exploited Common Secret you control (on any Mask). Grant it Immunity (Reveal Effects) until your next turn.",
        reveal="The Revealing Player May choose one Exploited Common Secret they control and grant it Immunity (Reveal Effects) until their next turn. You May discard this Secret.",
        flavor="Within these walls, even the shadows hold their silence.",
    ),
    _secret(
        "cat_common5",
        "Confession of Secrets",
        Rarity.COMMON,
        exploit="Choose 2 target Secrets in opponents' hands (can belong to the same or different opponents). Gain Insight on them. You May then choose one of those Secrets and Pay 1 Gold OR Pay 1 Information to Steal that Secret.",
        reveal="Discard this Secret. The Revealing Player Draws 1 Secret from the deck corresponding to the zone your character is in.",
        flavor="The confessional hides more than sins.",
    ),
    _secret(
        "cat_rare1",
        "The Cardinal's Decree",
        Rarity.RARE,
        exploit="If your Trust is the highest among all players (or be tied for the highest). If it is, each other player Loses 1 Trust (they May Pay you 1 Gold OR 1 Information to prevent this loss), if it isn't, Gain 2 Trust.",
        reveal="The Revealing Player Must Steal 2 Trust from you.",
        flavor="His word carries the weight of unquestionable authority.",
    ),
    _secret(
        "cat_rare2",
        "Infiltrator's Report",
        Rarity.RARE,
        exploit="Choose one other Secret currently Exploited on the same Mask as this Secret. Copy its Exploitation effect and apply it as if you had Exploited that Secret.",
        reveal="Discard this Secret. The Revealing Player Steals 1 Trust from you. Additionally, the Revealing Player Gains Insight on one Secret in your hand and May Use its Exploitation effect immediately.",
        flavor="An outsider's eyes see what the familiar overlook.",
    ),
    _secret(
        "cat_exotic1",
        "Crypt of Promises",
        Rarity.EXOTIC,
        exploit="Choose up to 2 other Secrets from your hand (respecting the normal Exploit limit of 3 total Secrets per turn, including this one). Instead of Exploiting the chosen Secrets, Discard them. For each Secret discarded this way, Gain 3 Gold and Gain Trust based on its rarity (Common: 1 Trust, Rare: 2 Trust, Exotic: 3 Trust).",
        reveal="The Revealing Player Must Steal 2 Gold and 2 Trust from you. The Revealing Player then Discards this Secret card.",
        flavor="Buried beneath stone are oaths never meant to be kept.",
    ),
]


# --- Royal Chamber ---
_ROYAL_CHAMBER = [
    _secret(
        "rc_common1",
        "The King's Secret Keeper",
        Rarity.COMMON,
        exploit="Pay 2 Gold to choose 1 of your other Exploited Secrets and return it to your hand immediately (this does not count as the Return Exploits phase). Additionally, You May Spend X Secrecy to return this Secret to your hand.",
        reveal="Lose 1 Trust. Discard one other Exploited Secret you control. The Revealing Player May Pay X Secrecy to choose and Keep that Secret.",
        flavor="A trusted confidant, guarding the kingdom's darkest truths.",
    ),
    _secret(
        "rc_common2",
        "The Crown's Favor",
        Rarity.COMMON,
        exploit="Gain 2 Gold. If your Gold total is highest among all players (or be tied for the highest), Gain 1 Trust as well. Additionally, if your Trust is 12 or higher, Gain Immunity (Reveal Effects) for one other Common Secret you control until your next turn. Additionally, you May Pay X Secrecy to Gain Immunity (Reveal Effects) for one other Common Secret you control until your next turn.",
        reveal="The Revealing Player Steals this Secret from you. Additionally, the Revealing Player May Pay X Secrecy to Use this Secret.",
        flavor="A rare privilege granted by the throne, shifting the balance of power.",
    ),
    _secret(
        "rc_common3",
        "Whispers in the Court",
        Rarity.COMMON,
        exploit="Gain 2 Information. You May Pay X Secrecy to Raise Suspicion and then Gain 1 Information for every 2 points of current Suspicion (rounded down).",
        reveal="The Revealing Player Adjusts Suspicion by 2 and Gains 1 Trust. Additionally, the Revealing Player May Pay X Secrecy to Use and Discard this Secret.",
        flavor="Secrets exchanged in hushed tones, where trust can be both a weapon and a shield.",
    ),
    _secret(
        "rc_common4",
        "Royal Messenger's Note",
        Rarity.COMMON,
        exploit="Gain 1 Secrecy. You May Pay 1 Secrecy to Gain 2 temporary Secrecy which will be lost upon the end of your turn.",
        reveal="The Revealing Player Must Steal 1 Secrecy and the Revealing Player May Pay 1 Secrecy to Discard 1 of your Exploited Secrets.",
        flavor="A sealed letter that carries weight—whose words could shift the balance of power.",
    ),
    _secret(
        "rc_common5",
        "Sovereign's Command",
        Rarity.COMMON,
        exploit="Choose one: Steal 2 Gold and 1 Information from one target player, OR Force one target player to Lose 1 Trust. You May Pay X Secrecy to target all opposing players. (You May choose for each targeted opponent differently)",
        reveal="Discard this Secret. The Revealing Player May Use this Secret.",
        flavor="A rare and dangerous letter, its words hold the potential to undo alliances and ruin reputations.",
    ),
    _secret(
        "rc_rare1",
        "Crown's Hidden Truth",
        Rarity.RARE,
        exploit="Choose one: Gain Immunity (Gold Loss), Gain Immunity (Information Loss) or Gain Immunity (Trust Loss) until the next turn. You May Pay X Secrecy to Gain Immunity (X Steal) depending on the already chosen resource.",
        reveal="Discard this Secret. The Revealing Player Must Steal 2 Information and May Raise Suspicion by up to 3. Additionally, the Revealing Player May Pay X Secrecy",
        flavor="Beneath the gleam of the crown lies a Secret that could shatter thrones.",
    ),
    _secret(
        "rc_rare2",
        "Crown's Shadow",
        Rarity.RARE,
        exploit="Draw 3 Secrets from any one Zone Deck of your choice. You May immediately Use the Exploitation effect of 1 of those drawn Secrets. Afterward, Discard all 3 drawn Secrets (including the one you Used, if any). You May Pay X Secrecy to Keep the Secret you are going to Use.",
        reveal="Discard this Secret (Crown's Shadow). The Revealing Player Gains this Secret's Exploitation effect, but with a bonus: the specific Secret whose effect they choose to Use is not discarded afterward; instead, they May Keep it. Additionally, the Revealing Player May Pay X Secrecy to Conceal 1 Exploited Secret.",
        flavor="Loyal to none, seen by none, yet feared by all—the shadow's reach is absolute.",
    ),
    _secret(
        "rc_exotic1",
        "The Queen's Trap",
        Rarity.EXOTIC,
        exploit="Placing this Secret onto a Mask slot does not count towards your limit of Secrets Exploited via Mask slots per turn. Pay 2 Secrecy to place this Secret onto one of your Mask slots, underneath any Secret already there (or onto an empty slot). This Secret remains Permanently on the Mask and cannot be returned to hand or discarded by any effect (unless specified otherwise). Win Condition: You win immediately at the start of your turn if this Secret has been successfully Exploited by you for the previous 3 full rounds (total 4 turns including placement) without you being Eliminated.",
        reveal="Lose 3 Trust.",
        flavor="A cunning move, where loyalty is the bait and ambition the snare.",
    ),
]


SECRET_CARDS: list[SecretCard] = [
    *_place(DOCKS_AND_GATES, _DOCKS_AND_GATES),
    *_place(EASTERN_TOWN_SQUARE, _TOWN_SQUARE_TEMPLATE, prefix="ets"),
    *_place(WESTERN_TOWN_SQUARE, _TOWN_SQUARE_TEMPLATE, prefix="wts"),
    *_place(TRADING_BAILEY, _TRADING_BAILEY),
    *_place(COURTYARD, _COURTYARD),
    *_place(CATHEDRAL, _CATHEDRAL),
    *_place(ROYAL_CHAMBER, _ROYAL_CHAMBER),
]
