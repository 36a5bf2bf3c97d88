"""
Merchant Category Code (MCC) reference data.

Confidence levels reflect how reliably a code identifies a single reward
category. Codes assigned to more than one category (5411 supermarkets vs.
warehouse clubs) are scored by the classifier's shared-code level instead.
"""

# Confidence that a code identifies its category (0.85 - 1.0)
MCC_CONFIDENCE_LEVELS = {
    # Dining
    5812: 0.98,  # Eating places, restaurants
    5813: 0.95,  # Bars, taverns, nightclubs
    5814: 0.97,  # Fast food restaurants
    5811: 0.90,  # Caterers

    # Groceries
    5412: 0.92,
    5422: 0.88,
    5451: 0.88,
    5462: 0.86,

    # Gas
    5541: 0.97,
    5542: 0.97,
    5552: 0.95,
    5983: 0.90,

    # Travel
    4511: 0.98,
    7011: 0.97,
    7012: 0.90,
    4722: 0.92,
    4411: 0.95,
    7512: 0.96,
    4582: 0.88,

    # Entertainment
    7832: 0.97,
    7922: 0.95,
    7929: 0.90,
    7996: 0.93,
    7999: 0.85,
    7941: 0.90,
    7991: 0.88,

    # Streaming
    4899: 0.95,
    5815: 0.93,
    5817: 0.88,
    5818: 0.88,

    # Drugstores
    5912: 0.98,
    5122: 0.86,

    # Home improvement
    5200: 0.97,
    5211: 0.95,
    5231: 0.92,
    5251: 0.95,
    5261: 0.90,

    # Department stores
    5311: 0.95,
    5331: 0.90,
    5399: 0.86,
    5651: 0.88,

    # Transit
    4111: 0.96,
    4112: 0.95,
    4121: 0.96,
    4131: 0.95,
    4784: 0.92,
    7523: 0.90,

    # Utilities
    4814: 0.95,
    4816: 0.90,
    4900: 0.97,

    # Warehouse
    5300: 0.97,

    # Office supplies
    5111: 0.92,
    5943: 0.95,
    5978: 0.86,

    # Insurance
    6300: 0.97,
    5960: 0.90,
}

MCC_DESCRIPTIONS = {
    5812: "Eating places and restaurants",
    5813: "Drinking places (bars, taverns, nightclubs)",
    5814: "Fast food restaurants",
    5811: "Caterers",
    5411: "Grocery stores and supermarkets",
    5412: "Grocery stores (convenience)",
    5422: "Freezer and locker meat provisioners",
    5451: "Dairy products stores",
    5462: "Bakeries",
    5541: "Service stations",
    5542: "Automated fuel dispensers",
    5552: "Electric vehicle charging",
    5983: "Fuel dealers",
    4511: "Airlines and air carriers",
    4722: "Travel agencies and tour operators",
    7011: "Hotels, motels and resorts",
    7012: "Timeshares",
    4411: "Cruise lines",
    7512: "Car rental agencies",
    4582: "Airports and airport terminals",
    7832: "Motion picture theaters",
    7922: "Theatrical producers and ticket agencies",
    7929: "Bands, orchestras and entertainers",
    7996: "Amusement parks and carnivals",
    7999: "Recreation services",
    7941: "Sports clubs and promoters",
    7991: "Tourist attractions and exhibits",
    4899: "Cable, satellite and pay television",
    5815: "Digital goods: media (books, movies, music)",
    5817: "Digital goods: applications",
    5818: "Digital goods: large digital goods merchant",
    5912: "Drug stores and pharmacies",
    5122: "Drugs and druggists' sundries",
    5200: "Home supply warehouse stores",
    5211: "Lumber and building materials stores",
    5231: "Glass, paint and wallpaper stores",
    5251: "Hardware stores",
    5261: "Nurseries and lawn and garden supply stores",
    5311: "Department stores",
    5331: "Variety stores",
    5399: "Miscellaneous general merchandise",
    5651: "Family clothing stores",
    4111: "Local and suburban commuter transportation",
    4112: "Passenger railways",
    4121: "Taxicabs and limousines",
    4131: "Bus lines",
    4784: "Tolls and bridge fees",
    7523: "Parking lots and garages",
    4814: "Telecommunication services",
    4816: "Computer network and information services",
    4900: "Utilities (electric, gas, water, sanitary)",
    5300: "Wholesale clubs",
    5111: "Stationery and office supplies",
    5943: "Stationery, office and school supply stores",
    5978: "Typewriter stores",
    6300: "Insurance sales and underwriting",
    5960: "Direct marketing: insurance services",
}
