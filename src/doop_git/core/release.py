"""Human-friendly release names derived from commit hashes.

The same hash always maps to the same alliterative "Adjective Noun" phrase.
Names are cosmetic only; different hashes may share a name.
"""

import hashlib
from typing import Dict, List, Tuple

# letter -> (adjectives, nouns)
WORDS: Dict[str, Tuple[List[str], List[str]]] = {
    "a": (["agile", "amber", "ancient", "arctic"], ["albatross", "anchor", "antelope", "aurora"]),
    "b": (["bold", "brave", "breezy", "bright"], ["badger", "beacon", "bison", "breaker"]),
    "c": (["calm", "clever", "cosmic", "crimson"], ["canyon", "comet", "condor", "coyote"]),
    "d": (["daring", "dapper", "dusky", "dynamic"], ["dingo", "dolphin", "dragon", "dune"]),
    "e": (["eager", "electric", "emerald", "epic"], ["eagle", "echo", "ember", "ermine"]),
    "f": (["fearless", "fierce", "frosty", "fuzzy"], ["falcon", "ferret", "fjord", "fox"]),
    "g": (["gentle", "giant", "golden", "grand"], ["gazelle", "glacier", "gopher", "griffin"]),
    "h": (["happy", "hidden", "hollow", "humble"], ["harbor", "hawk", "heron", "horizon"]),
    "i": (["icy", "idle", "indigo", "iron"], ["ibex", "iguana", "island", "ivy"]),
    "j": (["jade", "jaunty", "jolly", "jumping"], ["jackal", "jaguar", "jetty", "juniper"]),
    "k": (["keen", "kind", "kinetic", "knotty"], ["kestrel", "kiwi", "koala", "kraken"]),
    "l": (["lively", "lucky", "lunar", "lush"], ["lagoon", "lantern", "lemur", "lynx"]),
    "m": (["mellow", "mighty", "misty", "modest"], ["magpie", "marmot", "meadow", "moose"]),
    "n": (["neat", "nimble", "noble", "northern"], ["narwhal", "nebula", "newt", "nomad"]),
    "o": (["odd", "olive", "orange", "outer"], ["oasis", "ocelot", "orca", "otter"]),
    "p": (["patient", "polar", "proud", "purple"], ["panda", "pelican", "pine", "puffin"]),
    "q": (["quaint", "quick", "quiet", "quirky"], ["quail", "quarry", "quartz", "quokka"]),
    "r": (["rapid", "restless", "royal", "rustic"], ["raccoon", "raven", "reef", "river"]),
    "s": (["silent", "silver", "solar", "swift"], ["salmon", "sparrow", "summit", "swan"]),
    "t": (["tidy", "tranquil", "tropical", "turbo"], ["tapir", "thistle", "tiger", "tundra"]),
    "u": (["ultra", "upbeat", "urban", "useful"], ["umbrella", "unicorn", "urchin", "utopia"]),
    "v": (["valiant", "velvet", "vivid", "vocal"], ["valley", "viper", "volcano", "vulture"]),
    "w": (["wandering", "warm", "wild", "wise"], ["walrus", "willow", "wolf", "wombat"]),
    "y": (["yearly", "yellow", "young", "yummy"], ["yak", "yard", "yeti", "yucca"]),
    "z": (["zany", "zealous", "zen", "zesty"], ["zebra", "zenith", "zephyr", "zinnia"]),
}

LETTERS = sorted(WORDS)


def release_name(full_hash: str) -> str:
    """Return the release name for a commit hash, e.g. ``"Swift Salmon"``."""
    if not full_hash:
        raise ValueError("Cannot derive a release name from an empty hash")

    digest = hashlib.sha256(full_hash.encode("utf-8")).digest()
    letter = LETTERS[digest[0] % len(LETTERS)]
    adjectives, nouns = WORDS[letter]
    adjective = adjectives[digest[1] % len(adjectives)]
    noun = nouns[digest[2] % len(nouns)]
    return f"{adjective} {noun}".title()
