"""
Victory Conditions - Secret goals offered during VC selection.

Achievement is adjudicated at the table: the host records the winner
with CONCLUDE_GAME. Nothing here is evaluated by the engine.
"""

from .definitions import VictoryCondition


VICTORY_CONDITIONS: list[VictoryCondition] = [
    VictoryCondition(
        "vc1",
        "Architect of Chaos",
        "You win immediately if during your turn, you have Successfully Revealed 2 Secrets or "
        "more, AND the current Suspicion is 10 or higher.",
    ),
    VictoryCondition(
        "vc2",
        "Diplomatic Victory",
        "You win immediately if during your turn you achieve a state where Suspicion is 2 or "
        "lower, your Trust is 15 or higher, AND you have the highest Trust among all players "
        "(or are tied for the highest).",
    ),
    VictoryCondition(
        "vc3",
        "Information Broker",
        "You win immediately if at the End of your Turn you possess 9 Information, AND you have "
        "Successfully Revealed at least 2 Secrets during this turn.",
    ),
    VictoryCondition(
        "vc4",
        "King's Favourite",
        "You win immediately if during your turn your Trust > 16 AND Trust is higher than the "
        "average Trust score of the other two players by at least 5 points.",
    ),
    VictoryCondition(
        "vc5",
        "Master Manipulator",
        "(Condition 1) Special: If an opponent fulfills the condition to win by Exploiting The "
        "Queen’s Trap on their turn, you may immediately reveal this Victory Condition. If you "
        "do, you win the game instead of them.\n"
        "(Condition 2) Special: You win immediately if an opponent Reveals one of your Masks, and "
        "another opponent's Secret on that Mask triggers a Reveal Effect which causes that "
        "opponent's (the Secret's owner) elimination because their Trust becomes ≤ Suspicion "
        "(either via direct Trust loss or Suspicion raised by the effect). (You must reveal this "
        "Victory Condition immediately after effects resolve).\n"
        "(Condition 3) Condition: You win immediately at the start of your turn if The Queen’s "
        "Trap has been successfully Exploited by you for the previous 1 full rounds (total 2 "
        "turns including placement) without you being Eliminated.",
    ),
    VictoryCondition(
        "vc6",
        "Mastermind",
        "You win immediately if during your Return Exploits phase you return 1 Exotic Secret AND "
        "1 Rare Secret to your hand that were not Successfully targeted by a Reveal action "
        "during the previous round.",
    ),
    VictoryCondition(
        "vc7",
        "Masterstroke Turn",
        "You win immediately if during your turn you Successfully gain the Exploitation Effect "
        "from at least four different Secret cards, including at least one Common, one Rare, AND "
        "one Exotic Secret.",
    ),
    VictoryCondition(
        "vc8",
        "Resourceful Turnabout",
        "You win immediately if during your turn the cumulative gains from Secret Exploit and/or "
        "Reveal effects activated during this turn reach 5 or more Trust AND 5 or more Gold.",
    ),
    VictoryCondition(
        "vc9",
        "Secret Betrayal",
        "You win immediately if during your turn, your action directly causes an opponent's "
        "elimination by ensuring their Trust is ≤ Suspicion, either by reducing their Trust or "
        "by Raising Suspicion and your Trust must be lower than the Trust of the eliminated "
        "opponent before your action resolved",
    ),
    VictoryCondition(
        "vc10",
        "Secrecy Hoarder",
        "You win immediately if during your turn, after resolving your Exploits, you possess 6 "
        "or more Secrecy AND have 3 Royal Chamber Secrets currently Exploited.",
    ),
    VictoryCondition(
        "vc11",
        "Shadow Master",
        "You win immediately if during your Return Exploits phase, none of your Exploited "
        "Secrets from the previous round were Successfully Revealed, AND the current Suspicion "
        "level is 9 or higher.",
    ),
    VictoryCondition(
        "vc12",
        "The Financier",
        "You win immediately if during your turn, upon gaining Gold from the Exploit effect of "
        "your 3rd (or subsequent) different Secret this turn, you possess 17 or more Gold.",
    ),
    VictoryCondition(
        "vc13",
        "The Great Heist",
        "You win immediately if during your turn you perform an action that involves Stealing "
        "Gold, Information, or Trust, AND at that moment you possess 10 or more Gold, 6 or more "
        "Information, and the current Suspicion is 5 or lower. (Without Information Steal)",
    ),
    VictoryCondition(
        "vc14",
        "The Survivor",
        "Condition: You win immediately if at the End of your Turn, Trust > Suspicion (min 6), "
        "AND you started this turn with Trust ≤ Suspicion.\n"
        "Resilience (Passive): If your Trust drops to ≤ Suspicion (min 6), gain temporary "
        "Immunity to elimination via Trust vs. Suspicion (including from other VCs). Other "
        "players cannot declare victory during your Resilience Period.\n"
        "(If triggered on your turn: Immunity lasts until End of this Turn.)\n"
        "(If triggered outside your turn: Immunity lasts until End of your next Turn.)\n"
        "Resolution: You Must raise Trust > Suspicion by the end of the Resilience Period to "
        "avoid elimination. If you survive and meet the primary Condition at the End of your "
        "Turn, you win immediately. If you are eliminated, other pending wins may proceed.",
    ),
    VictoryCondition(
        "vc15",
        "Total Domination",
        "You win immediately if during your turn you possess (in hand or Exploited) the required "
        "Secret (or Rare/Exotic substitute) from each specified zone simultaneously:\n"
        "Docks and Gates: Smuggler's Network\n"
        "Town Squares: City Watch\n"
        "Trading Bailey: Customs Inspection\n"
        "Courtyard: Hidden Pact\n"
        "Cathedral: Sanctuary Seal\n"
        "Royal Chamber: Sovereign’s Command",
    ),
    VictoryCondition(
        "vc16",
        "Underdog Victory",
        "You win immediately if during your turn, you choose to use this card's ability to Raise "
        "Suspicion by 2, and doing so causes all players currently in the game (potentially "
        "including yourself) to have their Trust equal to or lower than the new Suspicion level.",
    ),
    VictoryCondition(
        "vc17",
        "War Planner",
        "You win immediately if during your turn, after resolving your Exploits, you have "
        "Exploited 3 Secrets (at least one Rare or Exotic) during this turn AND possess 10 or "
        "more Secret cards in your hand.",
    ),
    VictoryCondition(
        "vc18",
        "Zonal Supremacy",
        "You win immediately if during your turn you possess the highest number of Secrets from "
        "all zones (in hand or Exploited), or are tied for the highest.",
    ),
]
