"""
Static location lookup tables used by the location matcher.

All tables are read-only and built once at import time. Entries are lower-case;
no diacritic folding is applied, so "España" only matches the literal spelling.
"""
from types import MappingProxyType

METRO_AREAS = MappingProxyType({
    "nyc": frozenset({
        "new york", "nyc", "manhattan", "brooklyn", "queens", "bronx", "staten island",
    }),
    "la": frozenset({
        "los angeles", "la", "hollywood", "beverly hills", "santa monica", "west hollywood",
    }),
})

US_STATES = MappingProxyType({
    "alabama": ("alabama", "al"),
    "alaska": ("alaska", "ak"),
    "arizona": ("arizona", "az"),
    "arkansas": ("arkansas", "ar"),
    "california": ("california", "ca"),
    "colorado": ("colorado", "co"),
    "connecticut": ("connecticut", "ct"),
    "delaware": ("delaware", "de"),
    "florida": ("florida", "fl"),
    "georgia": ("georgia", "ga"),
    "hawaii": ("hawaii", "hi"),
    "idaho": ("idaho", "id"),
    "illinois": ("illinois", "il"),
    "indiana": ("indiana", "in"),
    "iowa": ("iowa", "ia"),
    "kansas": ("kansas", "ks"),
    "kentucky": ("kentucky", "ky"),
    "louisiana": ("louisiana", "la"),
    "maine": ("maine", "me"),
    "maryland": ("maryland", "md"),
    "massachusetts": ("massachusetts", "ma"),
    "michigan": ("michigan", "mi"),
    "minnesota": ("minnesota", "mn"),
    "mississippi": ("mississippi", "ms"),
    "missouri": ("missouri", "mo"),
    "montana": ("montana", "mt"),
    "nebraska": ("nebraska", "ne"),
    "nevada": ("nevada", "nv"),
    "new hampshire": ("new hampshire", "nh"),
    "new jersey": ("new jersey", "nj"),
    "new mexico": ("new mexico", "nm"),
    "new york": ("new york", "ny"),
    "north carolina": ("north carolina", "nc"),
    "north dakota": ("north dakota", "nd"),
    "ohio": ("ohio", "oh"),
    "oklahoma": ("oklahoma", "ok"),
    "oregon": ("oregon", "or"),
    "pennsylvania": ("pennsylvania", "pa"),
    "rhode island": ("rhode island", "ri"),
    "south carolina": ("south carolina", "sc"),
    "south dakota": ("south dakota", "sd"),
    "tennessee": ("tennessee", "tn"),
    "texas": ("texas", "tx"),
    "utah": ("utah", "ut"),
    "vermont": ("vermont", "vt"),
    "virginia": ("virginia", "va"),
    "washington": ("washington", "wa"),
    "west virginia": ("west virginia", "wv"),
    "wisconsin": ("wisconsin", "wi"),
    "wyoming": ("wyoming", "wy"),
})

US_REGIONS = MappingProxyType({
    "east_coast": (
        "maine", "new hampshire", "vermont", "massachusetts", "rhode island",
        "connecticut", "new york", "new jersey", "pennsylvania", "delaware",
        "maryland", "virginia",
    ),
    "west_coast": ("california", "oregon", "washington", "alaska", "hawaii"),
    "midwest": (
        "ohio", "michigan", "indiana", "illinois", "wisconsin", "minnesota",
        "iowa", "missouri", "kansas", "nebraska", "south dakota", "north dakota",
    ),
    "southwest": (
        "arizona", "new mexico", "texas", "oklahoma", "nevada", "utah", "colorado",
    ),
    "southeast": (
        "florida", "georgia", "north carolina", "south carolina", "alabama",
        "mississippi", "louisiana", "tennessee", "kentucky", "arkansas", "west virginia",
    ),
})

COUNTRIES = MappingProxyType({
    "united states": ("united states", "usa", "us", "u.s.", "u.s.a.", "america"),
    "united kingdom": ("united kingdom", "uk", "britain", "great britain", "england"),
    "canada": ("canada",),
    "germany": ("germany", "deutschland"),
    "france": ("france",),
    "spain": ("spain", "españa"),
    "italy": ("italy", "italia"),
    "netherlands": ("netherlands", "holland"),
    "sweden": ("sweden", "sverige"),
    "switzerland": ("switzerland", "schweiz", "suisse"),
    "japan": ("japan", "nippon"),
    "south korea": ("south korea", "korea"),
    "china": ("china", "prc"),
    "india": ("india", "bharat"),
    "singapore": ("singapore",),
    "australia": ("australia",),
    "brazil": ("brazil", "brasil"),
    "mexico": ("mexico", "méxico"),
    "united arab emirates": ("united arab emirates", "uae"),
})
