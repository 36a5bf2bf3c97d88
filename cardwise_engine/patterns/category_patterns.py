"""
Merchant category definitions for card reward matching.

Fourteen purchase categories, each with:
- keywords: merchant name fragments used by the keyword stage
- mcc_codes: Merchant Category Codes assigned by card networks
- reward_aliases: names issuers use for the category in reward tables
- subcategories: finer breakdowns (reward keys like "travel_airfare")
- parent_category: broader category used for reward fallback
"""

MERCHANT_CATEGORIES = {
    "dining": {
        "name": "Dining & Restaurants",
        "description": "Restaurants, cafes, bars and food delivery",
        "keywords": [
            "restaurant", "cafe", "coffee", "bar", "grill", "diner", "bistro", "pizzeria",
            "steakhouse", "sushi", "taqueria", "bakery cafe",
            "doordash", "grubhub", "uber eats", "ubereats", "deliveroo", "postmates",
            "chipotle", "mcdonalds", "burger king", "taco bell", "wendy's",
            "starbucks", "dunkin", "panera", "chick-fil-a", "popeyes",
            "olive garden", "cheesecake factory", "applebee's", "chili's",
            "outback steakhouse", "texas roadhouse", "ruth's chris",
            "dining", "food", "eat", "meal", "lunch", "dinner", "breakfast",
            "takeout", "food delivery",
        ],
        "mcc_codes": [5812, 5813, 5814, 5811],
        "reward_aliases": [
            "dining", "restaurants", "restaurant", "food", "eating", "dining_out",
            "food_dining",
        ],
        "subcategories": [
            "fine_dining", "casual_dining", "fast_casual", "fast_food", "cafe", "coffee",
            "delivery",
        ],
        "parent_category": None,
    },

    "groceries": {
        "name": "Groceries & Supermarkets",
        "description": "Grocery stores, supermarkets and farmers markets",
        "keywords": [
            "grocery", "groceries", "supermarket", "market", "whole foods", "trader joe's",
            "safeway", "kroger", "albertsons", "ralphs", "sprouts", "harris teeter",
            "publix", "wegmans", "aldi", "lidl", "instacart", "amazon fresh",
            "grocery delivery", "food market", "farmers market", "butcher", "produce",
        ],
        "mcc_codes": [5411, 5412, 5422, 5451, 5462],
        "reward_aliases": [
            "groceries", "grocery", "supermarket", "supermarkets", "grocery_stores",
            "food_grocery",
        ],
        "subcategories": [
            "supermarket", "natural_organic", "farmers_market", "specialty_food",
        ],
        "parent_category": None,
    },

    "gas": {
        "name": "Gas & Fuel",
        "description": "Gas stations, fuel dispensers and EV charging",
        "keywords": [
            "gas", "fuel", "gas station", "petrol", "chevron", "shell", "exxon", "mobil",
            "bp", "speedway", "pilot", "loves", "citgo", "sinclair", "valero", "sunoco",
            "ev charging", "electric vehicle charging", "tesla supercharger",
            "electrify america", "chargepoint", "evgo", "charging station", "fuel pump",
        ],
        "mcc_codes": [5541, 5542, 5552, 5983],
        "reward_aliases": ["gas", "fuel", "gasoline", "petrol", "gas_stations", "ev_charging"],
        "subcategories": ["gas_station", "ev_charging", "alternative_fuel"],
        "parent_category": None,
    },

    "travel": {
        "name": "Travel",
        "description": "Airlines, hotels, car rentals, cruises and travel agencies",
        "keywords": [
            "airline", "airlines", "flight", "airfare", "hotel", "motel", "resort", "hostel",
            "airbnb", "vrbo", "booking.com", "expedia", "kayak", "travelocity",
            "car rental", "hertz", "avis", "enterprise rent", "budget rent",
            "amtrak", "cruise", "delta", "united airlines", "american airlines",
            "southwest", "jetblue", "spirit airlines", "frontier airlines", "alaska air",
            "hyatt", "marriott", "hilton", "wyndham", "ihg", "accor",
            "travel agency", "vacation",
        ],
        "mcc_codes": [4511, 4722, 7011, 7012, 4411, 7512, 4582],
        "reward_aliases": [
            "travel", "airline", "airlines", "hotel", "hotels", "flight", "flights",
            "airfare", "car_rental", "lodging",
        ],
        "subcategories": ["airfare", "hotel", "car_rental", "cruises", "tours", "luggage"],
        "parent_category": None,
    },

    "entertainment": {
        "name": "Entertainment",
        "description": "Movies, theaters, concerts, live events and amusement parks",
        "keywords": [
            "movie", "cinema", "theater", "theatre", "amc", "regal", "cinemark",
            "concert", "festival", "ticketmaster", "live nation", "eventbrite",
            "vivid seats", "stubhub", "tickpick", "comedy club", "broadway",
            "amusement park", "theme park", "disneyland", "disney world",
            "sporting event", "sports ticket", "bowling", "entertainment",
        ],
        "mcc_codes": [7832, 7922, 7929, 7996, 7999, 7941, 7991],
        "reward_aliases": ["entertainment", "movies", "theater", "events", "sports", "concerts"],
        "subcategories": [
            "movies", "live_music", "theater", "comedy", "sports", "amusement_parks", "events",
        ],
        "parent_category": None,
    },

    "streaming": {
        "name": "Streaming & Subscriptions",
        "description": "Video and music streaming and digital subscriptions",
        "keywords": [
            "netflix", "hulu", "disney+", "disney plus", "disneyplus",
            "apple tv", "appletv", "amazon prime video", "prime video", "hbo max", "hbomax",
            "max streaming", "paramount+", "peacock", "apple music", "spotify",
            "youtube music", "youtube premium", "youtube tv", "audible", "scribd",
            "skillshare", "subscription", "streaming", "music streaming", "video streaming",
            "podcast",
        ],
        "mcc_codes": [4899, 5815, 5817, 5818],
        "reward_aliases": [
            "streaming", "streaming_services", "subscriptions", "digital_subscriptions",
            "digital_entertainment",
        ],
        "subcategories": [
            "video_streaming", "music_streaming", "podcast", "digital_subscriptions",
            "app_subscriptions",
        ],
        "parent_category": "entertainment",
    },

    "drugstores": {
        "name": "Drugstores & Pharmacy",
        "description": "Drugstores, pharmacies and health and beauty retailers",
        "keywords": [
            "cvs", "walgreens", "rite aid", "duane reade", "pharmacy", "drugstore",
            "drug store", "beauty", "makeup", "skincare", "wellness", "supplements",
            "vitamins", "medicine", "health and beauty", "personal care",
        ],
        "mcc_codes": [5912, 5122],
        "reward_aliases": ["drugstores", "drugstore", "pharmacy", "pharmacies", "drug_store"],
        "subcategories": ["pharmacy", "health_products", "beauty", "wellness", "personal_care"],
        "parent_category": None,
    },

    "home_improvement": {
        "name": "Home Improvement",
        "description": "Hardware stores, home improvement retailers and building materials",
        "keywords": [
            "home depot", "lowes", "lowe's", "home improvement", "hardware", "hardware store",
            "ace hardware", "menards", "lumber yard", "lumber", "flooring", "building materials",
            "garden center", "nursery", "diy", "renovation",
        ],
        "mcc_codes": [5200, 5211, 5231, 5251, 5261],
        "reward_aliases": ["home_improvement", "hardware", "diy", "home_improvement_retail"],
        "subcategories": ["hardware", "paint", "tools", "flooring", "lumber", "building_materials"],
        "parent_category": None,
    },

    "department_stores": {
        "name": "Department Stores",
        "description": "Department stores, clothing retailers and general merchandise",
        "keywords": [
            "amazon", "amazon.com", "target", "macy's", "macys", "nordstrom",
            "kohl's", "kohls", "jcpenney", "sears", "walmart", "department store",
            "clothing", "apparel", "fashion", "retail", "general merchandise", "shopping",
        ],
        "mcc_codes": [5311, 5331, 5399, 5651],
        "reward_aliases": [
            "department_stores", "department_store", "shopping", "retail", "online_shopping",
            "general_merchandise",
        ],
        "subcategories": [
            "online_shopping", "clothing", "general_retail", "fast_fashion",
        ],
        "parent_category": None,
    },

    "transit": {
        "name": "Transit & Rideshare",
        "description": "Public transportation, rideshare, taxis, tolls and parking",
        "keywords": [
            "uber", "lyft", "metro", "transit", "bus", "subway", "train",
            "mta", "bart", "caltrain", "greyhound", "taxi", "cab", "tram", "light rail",
            "commute", "public transportation", "rideshare", "carpool", "parking", "toll",
        ],
        "mcc_codes": [4111, 4112, 4121, 4131, 4784, 7523],
        "reward_aliases": [
            "transit", "rideshare", "ride_share", "transportation", "public_transit",
            "commute", "taxi",
        ],
        "subcategories": ["public_transit", "rideshare", "taxi", "train", "bus", "parking"],
        "parent_category": None,
    },

    "utilities": {
        "name": "Utilities",
        "description": "Phone, internet, cable, electric and water bills",
        "keywords": [
            "verizon", "at&t", "at and t", "comcast", "xfinity", "spectrum", "t-mobile",
            "phone bill", "internet", "cable", "cell phone", "wireless",
            "electric", "electricity", "water bill", "utility", "utilities",
            "internet bill", "cable bill", "telecom",
        ],
        "mcc_codes": [4814, 4816, 4900],
        "reward_aliases": [
            "utilities", "phone", "internet", "cable", "telecom", "wireless",
        ],
        "subcategories": ["phone", "internet", "cable", "electricity", "water", "telecom"],
        "parent_category": None,
    },

    "warehouse": {
        "name": "Warehouse Clubs",
        "description": "Warehouse membership clubs and bulk retailers",
        "keywords": [
            "costco", "sam's club", "sams club", "bj's wholesale", "bjs wholesale",
            "warehouse club", "membership club", "wholesale club", "bulk",
            "wholesale",
        ],
        "mcc_codes": [5411, 5300],
        "reward_aliases": ["warehouse", "warehouse_clubs", "wholesale_clubs", "costco", "sams_club"],
        "subcategories": ["warehouse_clubs", "bulk_shopping", "membership_clubs"],
        "parent_category": None,
    },

    "office_supplies": {
        "name": "Office Supplies",
        "description": "Office supply stores and business supplies",
        "keywords": [
            "staples", "office depot", "office max", "officemax",
            "office supplies", "office supply", "business supplies",
            "printing", "printer ink", "stationery",
        ],
        "mcc_codes": [5111, 5943, 5978],
        "reward_aliases": ["office_supplies", "office_supply", "business_supplies", "stationery"],
        "subcategories": ["printing", "business_equipment", "stationery"],
        "parent_category": None,
    },

    "insurance": {
        "name": "Insurance",
        "description": "Insurance premiums (auto, home, health, life)",
        "keywords": [
            "insurance", "insurance premium", "auto insurance", "car insurance",
            "home insurance", "health insurance", "life insurance", "renters insurance",
            "geico", "state farm", "progressive", "allstate", "liberty mutual",
            "nationwide insurance", "farmers insurance",
        ],
        "mcc_codes": [6300, 5960],
        "reward_aliases": ["insurance", "insurance_services", "insurance_premiums"],
        "subcategories": [
            "auto_insurance", "home_insurance", "health_insurance", "life_insurance",
        ],
        "parent_category": None,
    },
}
