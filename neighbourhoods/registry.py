"""
registry.py - Canonical neighbourhood names.

The 140 City of Toronto social planning neighbourhoods plus the city-wide
aggregate row, spelled the way the boundary dataset spells them once the
parenthetical suffix is dropped. These are the join keys shared by every
dataset.
"""

from typing import FrozenSet, Tuple

CITY_TOTAL = "City of Toronto"

CANONICAL_NAMES: Tuple[str, ...] = (
    CITY_TOTAL,
    "West Humber-Clairville",
    "Mount Olive-Silverstone-Jamestown",
    "Thistletown-Beaumond Heights",
    "Rexdale-Kipling",
    "Elms-Old Rexdale",
    "Kingsview Village-The Westway",
    "Willowridge-Martingrove-Richview",
    "Humber Heights-Westmount",
    "Edenbridge-Humber Valley",
    "Princess-Rosethorn",
    "Eringate-Centennial-West Deane",
    "Markland Wood",
    "Etobicoke West Mall",
    "Islington-City Centre West",
    "Kingsway South",
    "Stonegate-Queensway",
    "Mimico",
    "New Toronto",
    "Long Branch",
    "Alderwood",
    "Humber Summit",
    "Humbermede",
    "Pelmo Park-Humberlea",
    "Black Creek",
    "Glenfield-Jane Heights",
    "Downsview-Roding-CFB",
    "York University Heights",
    "Rustic",
    "Maple Leaf",
    "Brookhaven-Amesbury",
    "Yorkdale-Glen Park",
    "Englemount-Lawrence",
    "Clanton Park",
    "Bathurst Manor",
    "Westminster-Branson",
    "Newtonbrook West",
    "Willowdale West",
    "Lansing-Westgate",
    "Bedford Park-Nortown",
    "St.Andrew-Windfields",
    "Bridle Path-Sunnybrook-York Mills",
    "Banbury-Don Mills",
    "Victoria Village",
    "Flemingdon Park",
    "Parkwoods-Donalda",
    "Pleasant View",
    "Don Valley Village",
    "Hillcrest Village",
    "Bayview Woods-Steeles",
    "Newtonbrook East",
    "Willowdale East",
    "Bayview Village",
    "Henry Farm",
    "O'Connor-Parkview",
    "Thorncliffe Park",
    "Leaside-Bennington",
    "Broadview North",
    "Old East York",
    "Danforth East York",
    "Woodbine-Lumsden",
    "Taylor-Massey",
    "East End-Danforth",
    "The Beaches",
    "Woodbine Corridor",
    "Greenwood-Coxwell",
    "Danforth",
    "Playter Estates-Danforth",
    "North Riverdale",
    "Blake-Jones",
    "South Riverdale",
    "Cabbagetown-South St.James Town",
    "Regent Park",
    "Moss Park",
    "North St.James Town",
    "Church-Yonge Corridor",
    "Bay Street Corridor",
    "Waterfront Communities-The Island",
    "Kensington-Chinatown",
    "University",
    "Palmerston-Little Italy",
    "Trinity-Bellwoods",
    "Niagara",
    "Dufferin Grove",
    "Little Portugal",
    "South Parkdale",
    "Roncesvalles",
    "High Park-Swansea",
    "High Park North",
    "Runnymede-Bloor West Village",
    "Junction Area",
    "Weston-Pellam Park",
    "Corso Italia-Davenport",
    "Dovercourt-Wallace Emerson-Junction",
    "Wychwood",
    "Annex",
    "Casa Loma",
    "Yonge-St.Clair",
    "Rosedale-Moore Park",
    "Mount Pleasant East",
    "Yonge-Eglinton",
    "Forest Hill South",
    "Forest Hill North",
    "Lawrence Park South",
    "Mount Pleasant West",
    "Lawrence Park North",
    "Humewood-Cedarvale",
    "Oakwood Village",
    "Briar Hill-Belgravia",
    "Caledonia-Fairbank",
    "Keelesdale-Eglinton West",
    "Rockcliffe-Smythe",
    "Beechborough-Greenbrook",
    "Weston",
    "Lambton Baby Point",
    "Mount Dennis",
    "Steeles",
    "L'Amoreaux",
    "Tam O'Shanter-Sullivan",
    "Wexford/Maryvale",
    "Clairlea-Birchmount",
    "Oakridge",
    "Birchcliffe-Cliffside",
    "Cliffcrest",
    "Kennedy Park",
    "Ionview",
    "Dorset Park",
    "Bendale",
    "Agincourt South-Malvern West",
    "Agincourt North",
    "Milliken",
    "Rouge",
    "Malvern",
    "Centennial Scarborough",
    "Highland Creek",
    "Morningside",
    "West Hill",
    "Woburn",
    "Eglinton East",
    "Scarborough Village",
    "Guildwood",
)

CANONICAL_NAME_SET: FrozenSet[str] = frozenset(CANONICAL_NAMES)


def is_canonical(name: str) -> bool:
    """Return True if ``name`` is a registered canonical neighbourhood name."""
    return name in CANONICAL_NAME_SET
