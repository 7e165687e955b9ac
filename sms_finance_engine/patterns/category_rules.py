"""
Merchant categorisation rules.
Keyword rules for tier 2, known subscription services and variable
utility bill names used by recurring detection.
"""

# Tier 2 keyword rules, checked in order; first keyword hit wins.
KEYWORD_RULES = [
    {
        "category_id": 2,
        "description": "Transport",
        "confidence": 0.90,
        "keywords": [
            "uber", "ola", "rapido", "taxi", "cab", "metro", "bus", "train",
            "flight", "parking", "toll", "petrol", "diesel", "fuel", "gas station",
        ],
    },
    {
        "category_id": 1,
        "description": "Food",
        "confidence": 0.88,
        "keywords": [
            "swiggy", "zomato", "food", "restaurant", "cafe", "pizza", "burger",
            "kfc", "mcdonald", "domino", "starbucks", "coffee", "dinner", "lunch",
            "breakfast",
        ],
    },
    {
        "category_id": 3,
        "description": "Shopping",
        "confidence": 0.85,
        "keywords": [
            "amazon", "flipkart", "shop", "store", "mall", "retail", "myntra",
            "ajio", "fashion", "clothing", "apparel", "purchase",
        ],
    },
    {
        "category_id": 6,
        "description": "Bills",
        "confidence": 0.92,
        "keywords": [
            "electricity", "water", "gas bill", "broadband", "internet", "wifi",
            "jio", "airtel", "vi", "vodafone", "bsnl", "mobile", "recharge",
            "dth", "tata sky", "dish",
        ],
    },
    {
        "category_id": 5,
        "description": "Entertainment",
        "confidence": 0.87,
        "keywords": [
            "netflix", "prime", "hotstar", "spotify", "youtube", "movie",
            "cinema", "pvr", "inox", "bookmyshow", "subscription", "stream",
            "music",
        ],
    },
    {
        "category_id": 9,
        "description": "Groceries",
        "confidence": 0.86,
        "keywords": [
            "bigbasket", "grofer", "blinkit", "zepto", "dunzo", "grocery",
            "vegetables", "fruits", "supermarket", "dmart", "reliance fresh",
        ],
    },
    {
        "category_id": 4,
        "description": "Health",
        "confidence": 0.89,
        "keywords": [
            "hospital", "clinic", "doctor", "medical", "pharmacy", "medicine",
            "apollo", "netmeds", "1mg", "pharmeasy", "health",
        ],
    },
    {
        "category_id": 7,
        "description": "Education",
        "confidence": 0.88,
        "keywords": [
            "school", "college", "university", "course", "tuition", "fees",
            "education", "byju", "unacademy", "book", "exam",
        ],
    },
    {
        "category_id": 8,
        "description": "Travel",
        "confidence": 0.87,
        "keywords": [
            "hotel", "resort", "travel", "trip", "tour", "makemytrip", "goibibo",
            "cleartrip", "indigo", "spicejet", "vistara", "airindia", "oyo",
        ],
    },
    {
        "category_id": 13,
        "description": "Insurance",
        "confidence": 0.90,
        "keywords": [
            "insurance", "policy", "premium", "lic", "hdfc ergo",
            "icici lombard", "health insurance", "life insurance",
        ],
    },
    {
        "category_id": 14,
        "description": "Investments",
        "confidence": 0.91,
        "keywords": [
            "mutual fund", "sip", "stock", "equity", "zerodha", "groww",
            "upstox", "investment", "trading", "demat",
        ],
    },
]


# Known subscription services, lower-case
SUBSCRIPTION_MERCHANTS = [
    # Streaming
    "netflix", "hotstar", "jiohotstar", "jio hotstar", "prime video", "amazon prime",
    "spotify", "youtube", "youtube premium", "disney", "disney+", "zee5", "sonyliv",
    "apple music", "apple tv", "apple one", "hbo", "hulu", "mubi", "voot", "altbalaji",
    "aha", "sun nxt", "hoichoi", "discovery+",
    # Cloud & productivity
    "icloud", "google one", "google drive", "dropbox", "microsoft 365", "office 365",
    "adobe", "notion", "slack", "zoom", "grammarly", "canva", "figma", "github",
    "evernote", "todoist", "1password", "lastpass", "nordvpn", "expressvpn",
    # Gaming
    "playstation", "ps plus", "psn", "xbox", "xbox game pass", "nintendo", "steam",
    "epic games", "ubisoft", "ea play", "geforce now",
    # Fitness
    "cult", "cure.fit", "cult.fit", "healthify", "healthifyme", "fittr", "nike",
    "peloton", "headspace", "calm",
    # News & reading
    "times prime", "economic times", "the hindu", "hindu", "toi+", "mint",
    "audible", "kindle unlimited", "scribd", "blinkist", "medium",
    # Telecom & utilities
    "jio", "airtel", "vi", "vodafone", "idea", "bsnl", "tata play", "dish tv",
    "sun direct", "d2h", "act fibernet", "hathway", "you broadband",
    # Food & delivery memberships
    "swiggy one", "swiggy super", "zomato pro", "zomato gold", "dunzo",
    # Finance
    "cred protect", "cred", "paytm first", "amazon pay later",
    # Education
    "coursera", "udemy", "skillshare", "linkedin learning", "masterclass", "unacademy",
    "byjus", "byju's", "vedantu", "upgrad",
]


# Utility and telecom names whose amounts legitimately vary month to month
VARIABLE_BILL_PATTERNS = [
    "electricity", "electric", "bescom", "mseb", "tpddl", "bses", "cesc",
    "water", "gas", "internet", "broadband", "airtel", "jio", "vi ", "bsnl",
    "mobile", "postpaid", "prepaid", "recharge",
]
