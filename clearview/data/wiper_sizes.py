"""Wiper blade size reference table by vehicle make and model.

Keys are ``"Make_Model"`` (e.g. ``"Lexus_GX470"``). The first underscore
separates make from model; models may contain spaces or hyphens
(``"Land Cruiser"``, ``"F-150"``). Lookups are case-insensitive, see
``clearview.services.resolver``.

Values are ``(driver, passenger, rear)`` blade lengths in inches. ``rear`` is
``None`` when the vehicle has no rear wiper.
"""

from __future__ import annotations

SizeTriple = tuple[str, str, str | None]

# ---------------------------------------------------------------------------
# Reference table
#
# Updating this table is a data deployment; bump TABLE_VERSION when entries
# change so cached lookups on clients can be invalidated.
# ---------------------------------------------------------------------------

TABLE_VERSION = "2026.1"

WIPER_SIZES: dict[str, SizeTriple] = {
    # Toyota
    "Toyota_Camry": ('26"', '18"', None),
    "Toyota_Corolla": ('26"', '16"', '12"'),
    "Toyota_RAV4": ('26"', '16"', '12"'),
    "Toyota_Highlander": ('26"', '20"', '12"'),
    "Toyota_Tacoma": ('22"', '21"', None),
    "Toyota_4Runner": ('26"', '20"', '16"'),
    "Toyota_Tundra": ('22"', '22"', None),
    "Toyota_Sequoia": ('26"', '20"', '16"'),
    "Toyota_Sienna": ('26"', '20"', '14"'),
    "Toyota_Prius": ('26"', '16"', None),
    "Toyota_Avalon": ('26"', '19"', None),
    "Toyota_Land Cruiser": ('26"', '20"', '16"'),
    "Toyota_Venza": ('26"', '16"', '12"'),
    "Toyota_C-HR": ('26"', '16"', '12"'),
    "Toyota_GR Corolla": ('26"', '16"', '12"'),
    "Toyota_Crown": ('26"', '19"', None),
    "Toyota_bZ4X": ('26"', '16"', '12"'),

    # Lexus
    "Lexus_GX470": ('22"', '21"', '16"'),
    "Lexus_GX460": ('26"', '18"', '14"'),
    "Lexus_RX350": ('26"', '18"', '14"'),
    "Lexus_RX330": ('26"', '18"', '14"'),
    "Lexus_ES350": ('26"', '19"', None),
    "Lexus_ES300": ('26"', '18"', None),
    "Lexus_IS250": ('26"', '16"', None),
    "Lexus_IS350": ('26"', '16"', None),
    "Lexus_NX": ('26"', '16"', '12"'),
    "Lexus_LX570": ('26"', '20"', '16"'),
    "Lexus_LX470": ('26"', '20"', '16"'),

    # Honda
    "Honda_Civic": ('26"', '18"', None),
    "Honda_Accord": ('26"', '19"', None),
    "Honda_CR-V": ('26"', '17"', '12"'),
    "Honda_Pilot": ('26"', '21"', '12"'),
    "Honda_Odyssey": ('26"', '20"', None),
    "Honda_HR-V": ('26"', '16"', '12"'),
    "Honda_Passport": ('26"', '20"', '12"'),
    "Honda_Ridgeline": ('26"', '20"', None),
    "Honda_Fit": ('26"', '16"', None),
    "Honda_CR-V Hybrid": ('26"', '17"', '12"'),
    "Honda_Accord Hybrid": ('26"', '19"', None),
    "Honda_Civic Type R": ('26"', '18"', None),

    # Acura
    "Acura_Integra": ('26"', '18"', None),
    "Acura_TL": ('26"', '19"', None),
    "Acura_TSX": ('26"', '19"', None),
    "Acura_MDX": ('26"', '20"', '12"'),
    "Acura_RDX": ('26"', '17"', '12"'),
    "Acura_ILX": ('26"', '18"', None),

    # Ford
    "Ford_F-150": ('22"', '22"', None),
    "Ford_F-250": ('22"', '22"', None),
    "Ford_F-350": ('22"', '22"', None),
    "Ford_F-450": ('22"', '22"', None),
    "Ford_Super Duty": ('22"', '22"', None),
    "Ford_Explorer": ('26"', '20"', '12"'),
    "Ford_Escape": ('28"', '17"', '12"'),
    "Ford_Mustang": ('22"', '20"', None),
    "Ford_Edge": ('26"', '18"', '12"'),
    "Ford_Bronco": ('22"', '20"', '12"'),
    "Ford_Bronco Sport": ('26"', '16"', '12"'),
    "Ford_Fusion": ('26"', '19"', None),
    "Ford_Expedition": ('26"', '20"', '12"'),
    "Ford_Ranger": ('22"', '20"', None),
    "Ford_Transit": ('26"', '16"', None),
    "Ford_Transit Connect": ('26"', '16"', None),
    "Ford_Focus": ('26"', '18"', None),
    "Ford_F-150 Lightning": ('22"', '22"', None),

    # Chevrolet
    "Chevrolet_Silverado": ('22"', '22"', None),
    "Chevrolet_Silverado 1500": ('22"', '22"', None),
    "Chevrolet_Equinox": ('24"', '17"', '12"'),
    "Chevrolet_Malibu": ('26"', '19"', None),
    "Chevrolet_Tahoe": ('22"', '22"', None),
    "Chevrolet_Suburban": ('22"', '22"', None),
    "Chevrolet_Traverse": ('26"', '20"', '12"'),
    "Chevrolet_Colorado": ('22"', '20"', None),
    "Chevrolet_Impala": ('26"', '19"', None),
    "Chevrolet_Cruze": ('26"', '18"', None),
    "Chevrolet_Blazer": ('26"', '18"', '12"'),
    "Chevrolet_Camaro": ('22"', '20"', None),
    "Chevrolet_Express": ('22"', '22"', None),
    "Chevrolet_Trax": ('26"', '16"', '12"'),
    "Chevrolet_Spark": ('26"', '14"', None),

    # Nissan
    "Nissan_Altima": ('28"', '17"', None),
    "Nissan_Rogue": ('26"', '14"', '12"'),
    "Nissan_Murano": ('26"', '18"', '12"'),
    "Nissan_Pathfinder": ('26"', '20"', '12"'),
    "Nissan_Frontier": ('22"', '20"', None),
    "Nissan_Titan": ('22"', '22"', None),
    "Nissan_Sentra": ('26"', '16"', None),
    "Nissan_Leaf": ('26"', '18"', None),
    "Nissan_Armada": ('26"', '20"', '12"'),

    # Jeep
    "Jeep_Wrangler": ('18"', '18"', '12"'),
    "Jeep_Grand Cherokee": ('26"', '22"', '14"'),
    "Jeep_Cherokee": ('26"', '18"', '12"'),
    "Jeep_Compass": ('26"', '16"', '12"'),
    "Jeep_Renegade": ('26"', '16"', '12"'),
    "Jeep_Gladiator": ('22"', '20"', None),

    # Hyundai
    "Hyundai_Tucson": ('26"', '16"', '12"'),
    "Hyundai_Elantra": ('26"', '14"', None),
    "Hyundai_Santa Fe": ('26"', '18"', '12"'),
    "Hyundai_Sonata": ('26"', '19"', None),
    "Hyundai_Kona": ('26"', '16"', '12"'),
    "Hyundai_Palisade": ('26"', '20"', '12"'),
    "Hyundai_Accent": ('26"', '14"', None),

    # Kia
    "Kia_Sorento": ('26"', '18"', '12"'),
    "Kia_Sportage": ('26"', '16"', '12"'),
    "Kia_Optima": ('26"', '19"', None),
    "Kia_Forte": ('26"', '16"', None),
    "Kia_Soul": ('26"', '16"', '12"'),
    "Kia_Telluride": ('26"', '20"', '12"'),
    "Kia_Seltos": ('26"', '16"', '12"'),

    # Subaru
    "Subaru_Outback": ('26"', '17"', '14"'),
    "Subaru_Forester": ('26"', '17"', '14"'),
    "Subaru_Crosstrek": ('26"', '16"', '12"'),
    "Subaru_Impreza": ('26"', '16"', None),
    "Subaru_Legacy": ('26"', '19"', None),
    "Subaru_Ascent": ('26"', '20"', '12"'),
    "Subaru_WRX": ('26"', '16"', None),

    # Mazda
    "Mazda_CX-5": ('26"', '16"', '12"'),
    "Mazda_CX-50": ('26"', '16"', '12"'),
    "Mazda_CX-9": ('26"', '20"', '12"'),
    "Mazda_Mazda3": ('26"', '18"', None),
    "Mazda_Mazda6": ('26"', '19"', None),

    # GMC
    "GMC_Sierra": ('22"', '22"', None),
    "GMC_Sierra 1500": ('22"', '22"', None),
    "GMC_Acadia": ('26"', '20"', '12"'),
    "GMC_Terrain": ('24"', '17"', '12"'),
    "GMC_Yukon": ('22"', '22"', None),
    "GMC_Yukon XL": ('22"', '22"', None),
    "GMC_Canyon": ('22"', '20"', None),
    "GMC_Savana": ('22"', '22"', None),
    "GMC_Hummer EV": ('26"', '20"', None),

    # Dodge
    "Dodge_Ram 1500": ('24"', '21"', None),
    "Dodge_Durango": ('26"', '20"', '12"'),
    "Dodge_Charger": ('22"', '22"', None),
    "Dodge_Challenger": ('22"', '20"', None),
    "Dodge_Journey": ('26"', '18"', '12"'),

    # RAM (often listed separately from Dodge)
    "RAM_1500": ('24"', '21"', None),
    "RAM_2500": ('24"', '22"', None),
    "RAM_3500": ('24"', '22"', None),
    "RAM_ProMaster": ('26"', '16"', None),
    "RAM_ProMaster City": ('26"', '16"', None),

    # Volkswagen
    "Volkswagen_Jetta": ('25"', '19"', None),
    "Volkswagen_Passat": ('26"', '19"', None),
    "Volkswagen_Tiguan": ('26"', '18"', '12"'),
    "Volkswagen_Atlas": ('26"', '20"', '12"'),
    "Volkswagen_Golf": ('26"', '16"', None),

    # BMW
    "BMW_3 Series": ('24"', '19"', None),
    "BMW_5 Series": ('24"', '19"', None),
    "BMW_X3": ('26"', '18"', '14"'),
    "BMW_X5": ('26"', '20"', '14"'),

    # Mercedes
    "Mercedes_C-Class": ('22"', '22"', None),
    "Mercedes_E-Class": ('24"', '19"', None),
    "Mercedes_GLC": ('26"', '18"', '14"'),
    "Mercedes_GLE": ('26"', '20"', '14"'),

    # Audi
    "Audi_A4": ('26"', '19"', None),
    "Audi_A6": ('26"', '19"', None),
    "Audi_Q5": ('26"', '18"', '14"'),
    "Audi_Q7": ('26"', '20"', '14"'),

    # Tesla
    "Tesla_Model 3": ('26"', '19"', None),

    # Other
    "Infiniti_Q50": ('26"', '18"', None),
    "Infiniti_QX60": ('26"', '18"', '12"'),
    "Lincoln_Navigator": ('26"', '20"', '12"'),
    "Lincoln_Aviator": ('26"', '20"', '12"'),
    "Volvo_XC90": ('26"', '18"', '14"'),
    "Volvo_XC60": ('26"', '18"', '14"'),
    "Land Rover_Discovery": ('26"', '18"', '14"'),
    "Land Rover_Range Rover": ('26"', '20"', '14"'),
    "Mitsubishi_Outlander": ('26"', '18"', '12"'),
    "Genesis_GV80": ('26"', '18"', '12"'),
    "Porsche_Cayenne": ('26"', '20"', '14"'),
}

# Makes offered in the make picker. Not every make has table entries; an
# unmatched make simply resolves to "sizes unknown".
MAKES: list[str] = [
    "Acura", "Audi", "BMW", "Buick", "Cadillac", "Chevrolet", "Chrysler",
    "Dodge", "Fiat", "Ford", "Genesis", "GMC", "Honda", "Hyundai", "Infiniti",
    "Jaguar", "Jeep", "Kia", "Land Rover", "Lexus", "Lincoln", "Mazda",
    "Mercedes", "Mini", "Mitsubishi", "Nissan", "Porsche", "RAM", "Subaru",
    "Tesla", "Toyota", "Volkswagen", "Volvo",
]

NEWEST_MODEL_YEAR = 2026
YEARS: list[str] = [str(NEWEST_MODEL_YEAR - i) for i in range(30)]
