"""
Static substitution tables for ingredient text normalization.
Plain data, applied in order by halal_engine.normalization.normalizer; extend here, not in control flow.
"""
from typing import List, Tuple

# Typographic apostrophes seen on OFF data and label scans -> ASCII "'"
APOSTROPHE_VARIANTS = "‘’‛ʼ"

# Deterministic OCR repairs (regex, replacement). Each rule is scoped to a word
# context; never a bare digit/letter swap.
OCR_FIXES: List[Tuple[str, str]] = [
    # Digit/letter confusion (1/l/i, 0/o, 7/t)
    (r"gé1at", "gélat"),          # gé1atine -> gélatine (French, accent required)
    (r"a1coo", "alcoo"),          # a1cool -> alcool
    (r"\bge1at", "gelat"),        # ge1atin -> gelatin
    (r"\b1ard\b", "lard"),        # 1ard -> lard
    (r"\bsa1nd", "saind"),        # sa1ndoux -> saindoux
    (r"\bpo[r1]c\b", "porc"),     # po1c -> porc
    (r"\bp0rc\b", "porc"),        # p0rc -> porc
    (r"\bp0rk\b", "pork"),        # p0rk -> pork
    (r"\bw1ne\b", "wine"),        # w1ne -> wine
    (r"\ba1coho", "alcoho"),      # a1cohol -> alcohol
    (r"\brenne[t7]\b", "rennet"), # renne7 -> rennet
    # Letter swaps
    (r"\bgelatlne\b", "gelatine"),
    (r"\bgeiatine\b", "gélatine"),
    (r"\balcohoi\b", "alcohol"),
]

# Tokenization artifacts around hyphens in compound-word contexts.
# "mono - et diglycérides" -> "mono- et diglycérides" so the "mono-" rule matches.
PUNCTUATION_FIXES: List[Tuple[str, str]] = [
    (r"\bmono\s*-\s*(et|and|en|und)\b", r"mono- \1"),
]

# Label abbreviations (regex, replacement)
ABBREVIATIONS: List[Tuple[str, str]] = [
    (r"\bveg\.\s*", "vegetable "),
    (r"\bingr\.\s*", "ingrédients "),
    (r"\borig\.\s*", "origine "),
    (r"\bconc\.\s*", "concentré "),
    (r"\bpast\.\s*", "pasteurisé "),
]

# Stems used by the cheap needs-normalization check; keep in sync with ABBREVIATIONS
ABBREVIATION_STEMS = ("veg", "ingr", "orig", "conc", "past")

# Multilingual synonym -> canonical term matching a rule pattern.
# The canonical term is appended to the text, never substituted.
SYNONYMS: dict[str, str] = {
    # Gelatin
    "gelatina": "gélatine",                     # IT/ES
    "gelatine": "gélatine",                     # EN/DE
    "gelantine": "gélatine",                    # misspelling
    "food gelatin": "gelatin",
    "bovine gelatin": "gélatine bovine halal",
    "porcine gelatin": "gélatine porcine",
    "pork gelatin": "gélatine porcine",
    "pig gelatin": "gélatine porcine",
    "schweine gelatine": "gélatine porcine",    # DE
    "varkengelatine": "gélatine porcine",       # NL
    "gelatina de cerdo": "gélatine porcine",    # ES
    "fish gelatin": "gélatine de poisson",
    "gelatina di pesce": "gélatine de poisson", # IT
    # Fats & lard
    "animal fat": "graisse animale",
    "grasa animal": "graisse animale",          # ES
    "tierisches fett": "graisse animale",       # DE
    "dierlijk vet": "graisse animale",          # NL
    "pork fat": "graisse de porc",
    "pig fat": "graisse de porc",
    "schweinefett": "graisse de porc",          # DE
    "grasa de cerdo": "graisse de porc",        # ES
    "manteca de cerdo": "saindoux",             # ES lard
    "strutto": "saindoux",                      # IT lard
    "reuzel": "saindoux",                       # NL lard
    "schweineschmalz": "saindoux",              # DE lard
    "schmaltz": "saindoux",
    "tallow": "suif",
    "beef tallow": "suif",
    "shortening": "graisse végétale ou animale",
    "duck fat": "graisse de canard",
    "goose fat": "graisse d'oie",
    # Pork
    "cerdo": "porc",        # ES
    "maiale": "porc",       # IT
    "schwein": "porc",      # DE
    "varken": "porc",       # NL
    "suino": "porc",        # IT (adj)
    # Alcohol
    "alkohol": "alcool",    # DE
    "etanolo": "éthanol",   # IT
    "etanol": "éthanol",    # ES
    "spirits": "alcool",
    "liqueur": "alcool",
    "liquor": "alcool",
    "cognac": "brandy",
    "armagnac": "brandy",
    "grappa": "brandy",
    "marc": "brandy",
    "kirsch": "alcool",
    "calvados": "alcool",
    "amaretto": "alcool",
    "kahlua": "alcool",
    "marsala": "alcool",
    "sherry": "alcool",
    "porto": "alcool",
    "port wine": "alcool",
    "cooking wine": "alcool",
    "vin de cuisine": "alcool",
    # Rennet
    "lab": "présure",       # DE
    "stremsel": "présure",  # NL
    "cuajo": "présure",     # ES
    "caglio": "présure",    # IT
    "animal rennet": "présure animale",
    "vegetable rennet": "présure microbienne",
    "microbial rennet": "présure microbienne",
    # Whey
    "molke": "lactosérum",              # DE
    "wei": "lactosérum",                # NL
    "suero de leche": "lactosérum",     # ES
    "siero di latte": "lactosérum",     # IT
    "whey powder": "whey",
    "whey protein": "whey",
    "whey permeate": "whey",
    "sweet whey": "whey",
    # Carmine / E120
    "karmin": "carmine",                # DE
    "karmijn": "carmine",               # NL
    "carmín": "carmine",                # ES
    "cochiniglia": "cochineal",         # IT
    "carmines": "carmine",
    "carminic acid": "carmine",
    "acide carminique": "carmine",
    "cochenille": "cochineal",
    "natural red 4": "carmine",
    "c.i. 75470": "carmine",
    # E471 / mono- and diglycerides
    "mono- and diglycerides": "mono-",
    "mono and diglycerides": "mono-",
    "mono- et diglycérides": "mono-",
    "mono et diglycerides": "mono-",
    "mono-und diglyceride": "mono-",    # DE
    "mono en diglyceriden": "mono-",    # NL
    "emulsifier e471": "e471",
    "emulsifiant e471": "e471",
    "émulsifiant e471": "e471",
    "emulgator e471": "e471",           # DE
    # L-cysteine / E920
    "l-cystein": "l-cystéine",          # DE
    "l-cisteina": "l-cystéine",         # ES/IT
    "cysteine": "l-cystéine",
}

# Synonyms up to this length need a standalone-token match
SHORT_SYNONYM_MAX_LEN = 3

# Separator between the original text and the injected canonical terms
INJECTION_MARKER = " | "
INJECTION_JOINER = ", "

CANONICAL_TERMS = frozenset(SYNONYMS.values())
