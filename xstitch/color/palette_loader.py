"""Built-in thread catalogues.

Each catalogue keeps the manufacturer's listing order. Nearest-colour ties are
resolved by that order, so entries must not be re-sorted.
"""

from __future__ import annotations

from typing import Dict, Tuple

from ..core.errors import ConfigurationError
from ..models.pattern import Thread

_DMC_RAW = [
    ("310", "Black", (0, 0, 0)),
    ("B5200", "Snow White", (255, 255, 255)),
    ("White", "White", (252, 251, 248)),
    ("Ecru", "Ecru", (240, 234, 218)),
    ("3865", "Winter White", (249, 247, 241)),
    ("762", "Very Light Pearl Gray", (236, 236, 236)),
    ("415", "Pearl Gray", (211, 211, 214)),
    ("318", "Light Steel Gray", (171, 171, 171)),
    ("414", "Dark Steel Gray", (140, 140, 140)),
    ("317", "Pewter Gray", (108, 108, 108)),
    ("413", "Dark Pewter Gray", (86, 86, 86)),
    ("3799", "Very Dark Pewter Gray", (66, 66, 66)),
    ("844", "Ultra Dark Beaver Gray", (72, 72, 72)),
    ("321", "Red", (199, 43, 59)),
    ("666", "Bright Red", (227, 29, 66)),
    ("304", "Medium Red", (183, 31, 51)),
    ("498", "Dark Red", (167, 19, 43)),
    ("815", "Medium Garnet", (135, 7, 31)),
    ("814", "Dark Garnet", (123, 0, 27)),
    ("817", "Very Dark Coral Red", (187, 5, 31)),
    ("349", "Dark Coral", (210, 16, 53)),
    ("350", "Medium Coral", (224, 72, 72)),
    ("351", "Coral", (233, 106, 103)),
    ("352", "Light Coral", (253, 156, 151)),
    ("353", "Peach", (254, 215, 204)),
    ("3705", "Dark Melon", (255, 121, 146)),
    ("3706", "Medium Melon", (255, 173, 188)),
    ("3708", "Light Melon", (255, 203, 213)),
    ("600", "Very Dark Cranberry", (205, 47, 99)),
    ("601", "Dark Cranberry", (209, 40, 106)),
    ("602", "Medium Cranberry", (226, 72, 116)),
    ("603", "Cranberry", (255, 164, 190)),
    ("605", "Very Light Cranberry", (255, 192, 205)),
    ("3804", "Dark Cyclamen Pink", (224, 40, 118)),
    ("718", "Plum", (156, 36, 98)),
    ("917", "Medium Plum", (155, 19, 89)),
    ("915", "Dark Plum", (130, 0, 67)),
    ("550", "Very Dark Violet", (92, 24, 78)),
    ("552", "Medium Violet", (128, 58, 107)),
    ("553", "Violet", (163, 99, 139)),
    ("554", "Light Violet", (219, 179, 203)),
    ("208", "Very Dark Lavender", (131, 91, 139)),
    ("209", "Dark Lavender", (163, 123, 167)),
    ("210", "Medium Lavender", (195, 159, 195)),
    ("211", "Light Lavender", (227, 203, 227)),
    ("333", "Very Dark Blue Violet", (92, 84, 120)),
    ("340", "Medium Blue Violet", (173, 167, 199)),
    ("820", "Very Dark Royal Blue", (14, 5, 84)),
    ("796", "Dark Royal Blue", (17, 65, 109)),
    ("797", "Royal Blue", (19, 71, 125)),
    ("798", "Dark Delft Blue", (70, 106, 142)),
    ("799", "Medium Delft Blue", (116, 142, 182)),
    ("809", "Delft Blue", (148, 168, 198)),
    ("800", "Pale Delft Blue", (192, 204, 222)),
    ("995", "Dark Electric Blue", (38, 150, 182)),
    ("996", "Medium Electric Blue", (48, 194, 236)),
    ("3843", "Electric Blue", (20, 170, 208)),
    ("3844", "Dark Bright Turquoise", (18, 174, 186)),
    ("3845", "Medium Bright Turquoise", (4, 196, 202)),
    ("517", "Dark Wedgwood", (59, 118, 143)),
    ("3810", "Dark Turquoise", (72, 142, 154)),
    ("3812", "Very Dark Seagreen", (47, 140, 132)),
    ("3814", "Aquamarine", (80, 139, 125)),
    ("959", "Medium Seagreen", (89, 199, 180)),
    ("964", "Light Seagreen", (169, 226, 216)),
    ("909", "Very Dark Emerald Green", (21, 111, 73)),
    ("910", "Dark Emerald Green", (24, 126, 86)),
    ("911", "Medium Emerald Green", (24, 144, 101)),
    ("912", "Light Emerald Green", (27, 157, 107)),
    ("913", "Medium Nile Green", (109, 171, 119)),
    ("954", "Nile Green", (136, 186, 145)),
    ("955", "Light Nile Green", (162, 214, 173)),
    ("699", "Green", (5, 101, 23)),
    ("700", "Bright Green", (7, 115, 27)),
    ("701", "Light Green", (63, 143, 41)),
    ("702", "Kelly Green", (71, 167, 47)),
    ("703", "Chartreuse", (123, 181, 71)),
    ("704", "Bright Chartreuse", (158, 207, 52)),
    ("907", "Light Parrot Green", (199, 230, 102)),
    ("906", "Medium Parrot Green", (127, 179, 53)),
    ("905", "Dark Parrot Green", (98, 138, 40)),
    ("904", "Very Dark Parrot Green", (85, 120, 34)),
    ("3347", "Medium Yellow Green", (113, 130, 60)),
    ("3348", "Light Yellow Green", (204, 217, 177)),
    ("937", "Medium Avocado Green", (98, 113, 51)),
    ("936", "Very Dark Avocado Green", (76, 88, 38)),
    ("444", "Dark Lemon", (255, 214, 0)),
    ("307", "Lemon", (253, 237, 84)),
    ("445", "Light Lemon", (255, 251, 139)),
    ("743", "Medium Yellow", (254, 211, 118)),
    ("742", "Light Tangerine", (255, 191, 87)),
    ("741", "Medium Tangerine", (255, 163, 43)),
    ("740", "Tangerine", (255, 139, 0)),
    ("608", "Bright Orange", (253, 93, 53)),
    ("606", "Bright Orange-Red", (250, 50, 3)),
    ("947", "Burnt Orange", (255, 123, 77)),
    ("946", "Medium Burnt Orange", (235, 99, 7)),
    ("900", "Dark Burnt Orange", (209, 88, 7)),
    ("720", "Dark Orange Spice", (229, 92, 31)),
    ("721", "Medium Orange Spice", (242, 120, 66)),
    ("722", "Light Orange Spice", (247, 151, 111)),
    ("3340", "Medium Apricot", (255, 131, 111)),
    ("967", "Very Light Apricot", (255, 222, 213)),
    ("783", "Medium Topaz", (206, 145, 36)),
    ("782", "Dark Topaz", (174, 119, 32)),
    ("781", "Very Dark Topaz", (162, 109, 32)),
    ("780", "Ultra Very Dark Topaz", (148, 99, 26)),
    ("729", "Medium Old Gold", (208, 165, 62)),
    ("680", "Dark Old Gold", (188, 141, 14)),
    ("676", "Light Old Gold", (229, 206, 151)),
    ("677", "Very Light Old Gold", (245, 236, 203)),
    ("435", "Very Light Brown", (184, 119, 72)),
    ("434", "Light Brown", (152, 94, 51)),
    ("433", "Medium Brown", (122, 69, 31)),
    ("801", "Dark Coffee Brown", (101, 57, 25)),
    ("898", "Very Dark Coffee Brown", (73, 42, 19)),
    ("938", "Ultra Dark Coffee Brown", (54, 31, 14)),
    ("3371", "Black Brown", (30, 17, 8)),
    ("436", "Tan", (203, 144, 81)),
    ("437", "Light Tan", (228, 187, 142)),
    ("738", "Very Light Tan", (236, 204, 158)),
    ("739", "Ultra Very Light Tan", (248, 228, 200)),
    ("950", "Light Desert Sand", (238, 211, 196)),
    ("945", "Tawny", (251, 213, 187)),
    ("948", "Very Light Peach", (254, 231, 218)),
    ("3864", "Light Mocha Beige", (203, 182, 156)),
    ("3862", "Dark Mocha Beige", (138, 110, 78)),
    ("3031", "Very Dark Mocha Brown", (75, 60, 42)),
    ("640", "Very Dark Beige Gray", (133, 123, 97)),
    ("642", "Dark Beige Gray", (164, 152, 120)),
    ("644", "Medium Beige Gray", (221, 216, 203)),
    ("3072", "Very Light Beaver Gray", (230, 232, 232)),
    ("647", "Medium Beaver Gray", (176, 176, 149)),
    ("646", "Dark Beaver Gray", (135, 134, 107)),
    ("645", "Very Dark Beaver Gray", (100, 100, 82)),
]

_ANCHOR_RAW = [
    ("403", "Black", (0, 0, 0)),
    ("1", "White", (255, 255, 255)),
    ("926", "Ecru", (240, 234, 218)),
    ("398", "Pearl Grey", (211, 211, 214)),
    ("399", "Steel Grey", (171, 171, 171)),
    ("400", "Pewter Grey", (108, 108, 108)),
    ("401", "Dark Pewter Grey", (86, 86, 86)),
    ("9046", "Christmas Red", (199, 43, 59)),
    ("46", "Bright Red", (227, 29, 66)),
    ("47", "Medium Red", (183, 31, 51)),
    ("1005", "Dark Red", (167, 19, 43)),
    ("44", "Garnet", (135, 7, 31)),
    ("13", "Dark Coral", (210, 16, 53)),
    ("10", "Coral", (233, 106, 103)),
    ("8", "Salmon", (253, 156, 151)),
    ("24", "Light Pink", (255, 203, 213)),
    ("28", "Melon", (255, 121, 146)),
    ("78", "Dark Plum", (130, 0, 67)),
    ("101", "Dark Violet", (92, 24, 78)),
    ("98", "Violet", (163, 99, 139)),
    ("110", "Dark Lavender", (131, 91, 139)),
    ("108", "Light Lavender", (227, 203, 227)),
    ("127", "Navy", (14, 5, 84)),
    ("134", "Royal Blue", (19, 71, 125)),
    ("145", "Delft Blue", (116, 142, 182)),
    ("130", "Light Delft Blue", (148, 168, 198)),
    ("433", "Electric Blue", (38, 150, 182)),
    ("1089", "Turquoise", (20, 170, 208)),
    ("189", "Seagreen", (89, 199, 180)),
    ("229", "Emerald", (21, 111, 73)),
    ("923", "Forest Green", (5, 101, 23)),
    ("239", "Grass Green", (63, 143, 41)),
    ("238", "Chartreuse", (123, 181, 71)),
    ("256", "Lime", (158, 207, 52)),
    ("268", "Avocado", (98, 113, 51)),
    ("290", "Lemon", (255, 214, 0)),
    ("288", "Light Lemon", (253, 237, 84)),
    ("302", "Yellow", (254, 211, 118)),
    ("316", "Tangerine", (255, 139, 0)),
    ("330", "Bright Orange", (253, 93, 53)),
    ("335", "Orange Red", (250, 50, 3)),
    ("326", "Burnt Orange", (209, 88, 7)),
    ("309", "Topaz", (174, 119, 32)),
    ("307", "Old Gold", (208, 165, 62)),
    ("370", "Light Brown", (152, 94, 51)),
    ("371", "Medium Brown", (122, 69, 31)),
    ("381", "Coffee Brown", (54, 31, 14)),
    ("368", "Tan", (203, 144, 81)),
    ("366", "Light Tan", (236, 204, 158)),
    ("392", "Beige Grey", (164, 152, 120)),
]

_JPCOATS_RAW = [
    ("8403", "Black", (0, 0, 0)),
    ("1001", "White", (255, 255, 255)),
    ("8398", "Grey", (171, 171, 171)),
    ("8400", "Dark Grey", (86, 86, 86)),
    ("3500", "Christmas Red", (199, 43, 59)),
    ("3401", "Bright Red", (227, 29, 66)),
    ("3000", "Cardinal", (135, 7, 31)),
    ("3152", "Rose", (233, 106, 103)),
    ("3125", "Pink", (255, 173, 188)),
    ("4104", "Plum", (130, 0, 67)),
    ("4301", "Purple", (92, 24, 78)),
    ("4092", "Lavender", (195, 159, 195)),
    ("7080", "Navy", (14, 5, 84)),
    ("7100", "Royal Blue", (19, 71, 125)),
    ("7030", "Sky Blue", (148, 168, 198)),
    ("7001", "Baby Blue", (192, 204, 222)),
    ("6001", "Turquoise", (4, 196, 202)),
    ("6250", "Kelly Green", (7, 115, 27)),
    ("6258", "Emerald", (24, 126, 86)),
    ("6010", "Mint", (162, 214, 173)),
    ("6266", "Lime", (158, 207, 52)),
    ("6269", "Olive", (98, 113, 51)),
    ("2298", "Yellow", (255, 214, 0)),
    ("2290", "Lemon", (253, 237, 84)),
    ("2307", "Gold", (208, 165, 62)),
    ("2327", "Orange", (255, 139, 0)),
    ("2332", "Tangerine", (253, 93, 53)),
    ("5363", "Amber", (174, 119, 32)),
    ("5475", "Brown", (122, 69, 31)),
    ("5360", "Dark Brown", (54, 31, 14)),
    ("5578", "Tan", (203, 144, 81)),
    ("5933", "Beige", (236, 204, 158)),
]


def _build(raw) -> Tuple[Thread, ...]:
    return tuple(Thread(code=code, name=name, rgb=rgb) for code, name, rgb in raw)


DMC: Tuple[Thread, ...] = _build(_DMC_RAW)
ANCHOR: Tuple[Thread, ...] = _build(_ANCHOR_RAW)
JPCOATS: Tuple[Thread, ...] = _build(_JPCOATS_RAW)

PALETTES: Dict[str, Tuple[Thread, ...]] = {
    "dmc": DMC,
    "anchor": ANCHOR,
    "jpcoats": JPCOATS,
}

BRAND_NAMES: Dict[str, str] = {
    "dmc": "DMC",
    "anchor": "Anchor",
    "jpcoats": "J&P Coats",
}

# Generic ordering used by clients that do not know brand names.
PALETTE_ALIASES: Dict[str, str] = {
    "primary": "dmc",
    "secondary": "anchor",
    "tertiary": "jpcoats",
}


def resolve_palette_name(name: str | None) -> str:
    if name is None:
        return "dmc"
    key = str(name).strip().lower()
    key = PALETTE_ALIASES.get(key, key)
    if key not in PALETTES:
        raise ConfigurationError(f"Unknown thread palette: {name!r}", field="palette")
    return key


def load_palette(name: str | None = "dmc") -> Tuple[Thread, ...]:
    return PALETTES[resolve_palette_name(name)]
