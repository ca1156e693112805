"""
Fret Wars - Catalog & Tuning Tables

Static reference data consumed by the generators:

- CATALOG: every gear template that can show up in a market listing
- Rarity/condition population weights and condition price multipliers
- Locations with their category price biases and risk levels
- Tools, bag tiers, macro market events
- Jam duel challengers, approach options and performance items

Nothing in here is mutated at runtime.
"""

# (name, category, base_price, rarity, scam_risk, hot_risk, description, flavor_text)
CATALOG_ROWS = [
    ("1962 Strat Neck", "Parts", 900, "rare", 0.25, 0.35, "Pre-CBS Fender neck, rosewood fretboard", "The seller seems nervous. No case, just the neck wrapped in newspaper."),
    ("JCM800 Head", "Amp", 1800, "uncommon", 0.08, 0.12, "1983 Marshall JCM800 2203, working condition", "Comes with original footswitch. Owner says it's been in storage."),
    ("Klon Centaur", "Pedal", 2100, "legendary", 0.35, 0.25, "Gold horsie version, serial #2XXX", "Claims it's 'the real deal.' Wants cash only."),
    ("Epiphone Casino", "Guitar", 725, "common", 0.05, 0.05, "2019 Inspired By Gibson, sunburst", "Clean guitar, comes with gig bag. Receipts available."),
    ("Boss DS-1 Keeley", "Pedal", 200, "common", 0.03, 0.02, "Keeley modded DS-1, seeing tone mod", "Seller has good reviews. Comes with box."),
    ("Vintage Tolex Roll", "Parts", 140, "uncommon", 0.15, 0.08, "Original Fender tweed tolex, 3 yards", "Smells like a basement. Could be authentic."),
    ("’70s Jazz Bass", "Guitar", 1650, "rare", 0.18, 0.2, "Black block inlays, heavy relic wear", "Seller swears it toured. No docs, just vibes."),
    ("Tube Screamer TS808", "Pedal", 900, "rare", 0.2, 0.1, "Original TS808, battery door intact", "Boxes of pedals behind him. This one sits on top."),
    ("Silverface Twin Reverb", "Amp", 1100, "uncommon", 0.1, 0.08, "1974 Fender Twin Reverb, loud and clean", "Garage sale find. Owner says it belonged to an uncle."),
    ("MXR Carbon Copy", "Pedal", 140, "common", 0.06, 0.05, "Analog delay with modulation", "A little dusty, knobs still smooth."),
    ("P90 Pickup Set", "Parts", 180, "common", 0.05, 0.05, "Cream covers, vintage spec winds", "Seller calls them 'custom shop', no proof."),
    ("1966 Mustang", "Guitar", 1300, "rare", 0.22, 0.28, "Competition stripes, short scale", "Photos look legit. Seller wants to meet after dark."),
    ("Mini Plexi Stack", "Amp", 750, "uncommon", 0.12, 0.1, "Lunchbox head with 1x12 cab", "Studio owner downsizing. Sounds huge."),
    ("NOS Capacitor Lot", "Parts", 90, "common", 0.08, 0.02, "Old stock caps, mixed values", "Bag looks untouched since the 80s."),
    ("Fender Deluxe Gig Bag", "Parts", 70, "common", 0.03, 0.01, "Padded Fender bag, fits most electrics", "A little scuffed but the padding is solid."),
    ("SKB TSA Hard Case", "Parts", 160, "common", 0.03, 0.02, "Molded hardshell case with TSA latches", "Stickers from a touring cycle still on it."),
    ("Hosa Patch Cable Bundle", "Parts", 30, "common", 0.02, 0.01, "Short patch cables, mixed colors", "A few are flaky, most are fine."),
    ("Gotoh Tele Bridge", "Parts", 95, "common", 0.05, 0.03, "Tele bridge with compensated saddles", "Clean plating, light pick wear."),
    ("Sylvania 6L6GC Pair", "Parts", 140, "uncommon", 0.08, 0.03, "Matched pair, tested and labeled", "Seller shows test numbers in a notebook."),
    ("Weller Soldering Station", "Parts", 90, "uncommon", 0.03, 0.01, "Temperature-controlled station with tips", "Warm in 30 seconds. Looks shop-owned."),
    ("Boss SD-1", "Pedal", 70, "common", 0.03, 0.02, "Classic Super OverDrive, yellow", "Every local shop has one. This one's clean."),
    ("ProCo Rat 2", "Pedal", 95, "common", 0.04, 0.02, "The standard Rat distortion", "Velcro on the bottom. That means it's loved."),
    ("MXR Phase 90", "Pedal", 130, "common", 0.05, 0.02, "Orange box, single knob", "Slight scratch in the logo. No box."),
    ("Boss TU-3", "Pedal", 75, "common", 0.02, 0.01, "Stage tuner, built like a tank", "Always on, always reliable."),
    ("Electro-Harmonix Big Muff", "Pedal", 110, "common", 0.04, 0.03, "NYC reissue fuzz", "Muffs everything. In a good way."),
    ("Way Huge Aqua Puss", "Pedal", 160, "uncommon", 0.08, 0.04, "Analog delay with splashy repeats", "The repeats sound like a tape machine."),
    ("Strymon El Capistan", "Pedal", 260, "uncommon", 0.09, 0.05, "Tape echo simulator, minty", "Knobs feel smooth. Seller seems legit."),
    ("Vintage Fuzz Face", "Pedal", 550, "rare", 0.22, 0.12, "Round enclosure, germanium", "Seller claims original transistors."),
    ("Line 6 DL4 (Green)", "Pedal", 200, "uncommon", 0.1, 0.04, "Looper/delay workhorse", "Stomp switches feel a little crunchy."),
    ("Fender Frontman 10G", "Amp", 70, "common", 0.03, 0.01, "Small solid-state practice combo", "Clean channel is fine. Drive is harsh."),
    ("Fender Blues Junior", "Amp", 350, "uncommon", 0.08, 0.05, "15W tube combo, giggable", "Tolex is clean, tubes are warm."),
    ("Fender Hot Rod Deluxe", "Amp", 450, "uncommon", 0.1, 0.06, "40W tube combo, loud", "Seller warns: it gets loud fast."),
    ("Peavey Classic 30", "Amp", 380, "uncommon", 0.07, 0.05, "Workhorse combo, reliable", "Gig tape still on the handle."),
    ("Orange Tiny Terror", "Amp", 420, "uncommon", 0.1, 0.06, "Tiny head, big sound", "Looks like it sat on a lot of cabs."),
    ("Roland JC-120", "Amp", 650, "rare", 0.12, 0.08, "Stereo clean machine", "Chorus is lush. It's a heavy lift."),
    ("MIM Stratocaster", "Guitar", 420, "common", 0.06, 0.04, "Made in Mexico Strat, sunburst", "Action set low. Plays easy."),
    ("Squier Classic Vibe Tele", "Guitar", 320, "common", 0.05, 0.03, "Surprisingly good for the price", "Seller says it 'punches above its weight.'"),
    ("Epiphone Sheraton II", "Guitar", 520, "uncommon", 0.08, 0.05, "Semi-hollow, gold hardware", "Plays smooth. A little tarnish."),
    ("Gibson SG Standard", "Guitar", 1250, "rare", 0.2, 0.18, "Cherry SG with burstbuckers", "Seller has an old receipt and a firm price."),
    ("Gretsch Streamliner", "Guitar", 450, "common", 0.07, 0.04, "Hollow-body sparkle finish", "A little scratch near the jack."),
    ("Yamaha Revstar", "Guitar", 620, "uncommon", 0.08, 0.05, "Modern classic with P90s", "Neck feels fast. Seller is chatty."),
    ("Ibanez RG550", "Guitar", 700, "uncommon", 0.1, 0.06, "Superstrat with locking trem", "Original case but missing trem arm."),
    ("Martin D-18 (Used)", "Guitar", 1600, "rare", 0.22, 0.15, "Mahogany dreadnought, warm", "Smells like cedar and old coffee."),
    ("Takamine EG340", "Guitar", 380, "common", 0.06, 0.03, "Stage acoustic with pickup", "Case included. Strap locks on it."),
    ("Project Strat Body", "Parts", 150, "common", 0.06, 0.04, "Stripped body, needs hardware", "Bare wood, a few dents."),
    ("Loaded Pickguard", "Parts", 120, "common", 0.05, 0.03, "Single-coil set prewired", "Looks clean, seller swaps parts often."),
    ("Vintage Tremolo Arm", "Parts", 55, "common", 0.04, 0.02, "Screw-in trem arm, aged", "Probably came off a Japanese copy."),
    ("Pedal Power Supply", "Parts", 120, "uncommon", 0.06, 0.02, "Isolated outputs, 8 taps", "Comes with a messy bag of cables."),
    ("Flight Case (Road)", "Parts", 180, "uncommon", 0.05, 0.03, "Road case with dents and stickers", "Smells like backstage beer and smoke."),
    ("Boss CE-2", "Pedal", 320, "rare", 0.18, 0.1, "Classic chorus, blue label", "Seller talks about Japanese circuits."),
    ("Eventide H9", "Pedal", 500, "rare", 0.16, 0.08, "Multi-effect powerhouse", "License transfer not confirmed."),
    ("Chase Bliss Mood", "Pedal", 380, "rare", 0.14, 0.06, "Experimental delay/looper", "Hard to find locally. Seller is cagey."),
    ("Dumble ODS Clone", "Amp", 2400, "legendary", 0.35, 0.25, "Handwired boutique head", "Seller says it's 'close enough.'"),
    ("’50s Tweed Champ", "Amp", 2600, "legendary", 0.3, 0.22, "Tiny vintage combo, original tweed", "Looks like a museum piece."),
    ("Custom Shop Tele", "Guitar", 2800, "legendary", 0.28, 0.2, "Relic finish, COA included", "Seller keeps it in a velvet-lined case."),
    ("Pre-CBS Jazzmaster", "Guitar", 4200, "legendary", 0.4, 0.3, "Offset holy grail, slab board", "Serial photos are blurry on purpose."),
    ("Vintage PAF Set", "Parts", 2200, "legendary", 0.35, 0.25, "Original PAF humbuckers", "Seller refuses to ship. Meet only."),
]

CATALOG_COLUMNS = (
    'name', 'category', 'base_price', 'rarity', 'scam_risk', 'hot_risk', 'description', 'flavor_text',
)

CATALOG = [dict(zip(CATALOG_COLUMNS, row)) for row in CATALOG_ROWS]

CATEGORIES = ('Guitar', 'Amp', 'Pedal', 'Parts')

CATEGORY_SLOTS = {
    'Amp': 3,
    'Guitar': 2,
    'Pedal': 1,
    'Parts': 1,
}

RARITIES = ('common', 'uncommon', 'rare', 'legendary')

RARITY_WEIGHTS = {
    'common': 55,
    'uncommon': 30,
    'rare': 12,
    'legendary': 3,
}

RARITY_RANK = {
    'common': 1,
    'uncommon': 2,
    'rare': 3,
    'legendary': 4,
}

CONDITIONS = ('Mint', 'Player', 'Project')

CONDITION_WEIGHTS = {
    'Mint': 20,
    'Player': 60,
    'Project': 20,
}

CONDITION_MULTIPLIER = {
    'Mint': 1.1,
    'Player': 1.0,
    'Project': 0.85,
}

# --- Market generation tuning ---
MARKET_MIN_LISTINGS = 7
MARKET_LISTING_SPREAD = 3          # 7..9 listings
PRICE_DRIFT = 0.3                  # +/- 15%
PRICE_FLOOR = 40
AFFORDABLE_PRICE = 300             # at least one listing at or below this every day
CHEAP_TEMPLATE_MAX_BASE = 200
MAX_LEGENDARIES_PER_DAY = 1
TREND_THRESHOLD = 0.06

# --- Locations ---
# risk_level drives arrival flavor and the heat bump on gear bought there.
LOCATIONS = [
    {
        'id': 'downtown',
        'name': 'Downtown Music Row',
        'description': 'The main strip. Safe deals, fair prices.',
        'risk_level': 'Low',
        'travel_time': 1,
        'bias': {'Guitar': 0.05, 'Amp': 0.03, 'Pedal': 0.03, 'Parts': 0.02},
    },
    {
        'id': 'vintage',
        'name': 'Vintage Alley',
        'description': 'Old stock, rare finds. Authenticity varies.',
        'risk_level': 'Medium',
        'travel_time': 2,
        'bias': {'Guitar': 0.07, 'Amp': 0.05, 'Pedal': 0.04, 'Parts': 0.02},
    },
    {
        'id': 'warehouse',
        'name': 'The Warehouse District',
        'description': 'Bulk deals and estate sales. Watch your back.',
        'risk_level': 'High',
        'travel_time': 3,
        'bias': {'Guitar': -0.02, 'Amp': -0.04, 'Pedal': -0.01, 'Parts': -0.03},
    },
    {
        'id': 'suburbs',
        'name': 'Suburban Pawn Shops',
        'description': 'Hidden gems among the junk. Slow moving.',
        'risk_level': 'Low',
        'travel_time': 2,
        'bias': {'Guitar': -0.01, 'Amp': 0.01, 'Pedal': -0.02, 'Parts': 0.0},
    },
    {
        'id': 'underground',
        'name': 'The Underground',
        'description': 'No questions asked. High risk, high reward.',
        'risk_level': 'High',
        'travel_time': 4,
        'bias': {'Guitar': 0.04, 'Amp': 0.06, 'Pedal': 0.05, 'Parts': 0.01},
    },
]

LOCATIONS_BY_NAME = {loc['name']: loc for loc in LOCATIONS}

START_LOCATION = 'Downtown Music Row'

ARRIVAL_MESSAGES = {
    'High': ("You feel eyes on you as you arrive.", 'warning'),
    'Medium': ("The area seems quiet. For now.", 'event'),
    'Low': ("You arrive without incident.", 'success'),
}

# --- Run setup ---
STARTING_CASH = 2500
STARTING_REPUTATION = 50
STANDARD_RUN_DAYS = 21
MIN_RUN_DAYS = 7
MAX_RUN_DAYS = 90
FLIP_WINDOW_DAYS = 5
MAX_FLIP_DAYS = 6

INITIAL_MESSAGES = [
    ("Welcome to Fret Wars. The gear market awaits.", 'info'),
    ("Market volatility increases after influencer buzz.", 'event'),
    ("Pawn shop owner quietly shows you a vintage Fender case.", 'event'),
    ("A local dealer warns: 'Watch out for the '62 parts flooding in.'", 'warning'),
]

# --- Tools & bags ---
TOOL_COSTS = {
    'serial_scanner': 350,
    'price_guide': 250,
    'insurance_plan': 300,
    'luthier_bench': 500,
}

TOOL_LABELS = {
    'serial_scanner': 'Serial Scanner',
    'price_guide': 'Price Guide',
    'insurance_plan': 'Insurance Plan',
    'luthier_bench': 'Luthier Access',
}

# tier -> (label, capacity, upgrade cost to reach this tier)
BAG_TIERS = {
    0: ('Gig Bag', 10, 0),
    1: ('Hard Case', 14, 400),
    2: ('Flight Case', 18, 900),
}

# --- Heat & repo ---
HEAT_HIGH = 70
HEAT_MEDIUM = 30
HOT_ITEM_HEAT = 40
REPO_BASE = 0.05
REPO_PER_HEAT = 0.002
REPO_PER_HOT_ITEM = 0.05
REPO_PER_LISTING = 0.08
REPO_PER_RECENT_FLIP = 0.06
REPO_REP_RELIEF = 0.002
REPO_SCANNER_RELIEF = 0.08
REPO_MAX = 0.75
REPO_RECENT_FLIP_DAYS = 3
REPO_REP_LOSS = 8
REPO_FINE_MIN = 80
REPO_FINE_RATE = 0.04
REPO_INSURANCE_PAYOUT = 0.4

REPO_MESSAGES = [
    "Two suits flash badges. Serial checks get tense fast.",
    "A patrol rolls through and asks about your haul.",
    "A buyer backs out. Says heat is high after a raid.",
    "You spot a familiar van circling the block.",
]

# --- Authentication & luthier ---
AUTH_RESULTS = {
    # outcome -> (price multiplier or None to keep, heat reduction, reputation change)
    'success': (1.08, 40, 1),
    'fail': (0.9, 0, -1),
    'partial': (None, 15, 0),
}

# --- Macro market events ---
# kind 'discount' pulls 1-2 matching listings toward 45-80% of base,
# kind 'spike' pushes them to 105-140% of base.
MARKET_SHIFTS = [
    {
        'id': 'influencer_hype',
        'message': "Influencer hype nudges boutique prices upward.",
        'kind': 'spike',
        'categories': ('Pedal',),
        'rarities': None,
    },
    {
        'id': 'estate_glut',
        'message': "Estate sale glut lowers vintage asking prices.",
        'kind': 'discount',
        'categories': None,
        'rarities': ('rare', 'legendary'),
    },
    {
        'id': 'pawn_flush',
        'message': "Pawn shops are flush after a touring weekend.",
        'kind': 'discount',
        'categories': ('Guitar',),
        'rarities': None,
    },
    {
        'id': 'collectors_quiet',
        'message': "Collectors are quiet today. Fewer bidding wars.",
        'kind': 'discount',
        'categories': None,
        'rarities': ('uncommon',),
    },
    {
        'id': 'raid_nerves',
        'message': "Word is a shop just got raided. Sellers are nervous.",
        'kind': 'spike',
        'categories': ('Amp', 'Parts'),
        'rarities': None,
    },
]

SHIFT_RANGES = {
    'discount': (0.45, 0.80),
    'spike': (1.05, 1.40),
}

MAX_MACRO_MESSAGES = 2

# --- Daily random events ---
JAM_CHANCE = 0.18
WORLD_AUCTION_CHANCE = 0.08
ENCOUNTER_CHANCE = 0.22
BULK_LOT_SHARE = 0.32
TRADE_OFFER_SHARE = 0.28
MYSTERY_SHARE = 0.20

# --- Encounters ---
BULK_LOT_SIZE = (3, 4)
BULK_LOT_PRICE_RANGE = (0.55, 0.80)
BULK_LOT_ENTRY_RATE = 0.75
BULK_LOT_PROJECT_CHANCE = (0.25, 0.45)
BULK_VAGUE_LABELS = {
    'Guitar': "A guitar-shaped case, latches rusted",
    'Amp': "Something heavy with tubes rattling inside",
    'Pedal': "A shoebox of pedals, velcro everywhere",
    'Parts': "Loose parts in a coffee can",
}

TRADE_DECLINE_GRACE = 2            # declines after this many cost reputation
MYSTERY_PRICE_RANGE = (0.35, 0.55)
MYSTERY_SCAM_BUMP = 0.30
MYSTERY_SCAM_CAP = 0.9
MYSTERY_HEAT_BUMP = 20
MYSTERY_VANISH_CHANCE = 0.35
MYSTERY_PROOF_RELIEF = 0.25
MYSTERY_SCAM_FLOOR = 0.05
MYSTERY_SCAM_REP_LOSS = 4

WORLD_AUCTION_START_RATE = 0.55
WORLD_AUCTION_PREMIUM = 0.05
WORLD_AUCTION_MIN_REP = 45
WORLD_AUCTION_COUNTDOWN = 20
OPPONENT_BASE_RANGE = (0.45, 1.65)
OPPONENT_SPIKE_CHANCE = 0.22
OPPONENT_SPIKE_RANGE = (0.90, 2.20)

# (upper bound on item base price, bid increment)
BID_INCREMENTS = [
    (500, 25),
    (1000, 50),
    (2500, 100),
    (5000, 250),
]
MAX_BID_INCREMENT = 500

REPAIR_SCARE_SAFE_CHANCE = 0.06
REPAIR_SCARE_CHANCE = 0.18
REPAIR_COMP_RATE = 0.85
REPAIR_COMP_FLOOR = 25

# --- Player-listed auctions ---
PLAYER_AUCTION_PREMIUM = 0.10
PLAYER_AUCTION_DAYS = 1
PLAYER_AUCTION_BASE_RANGE = (0.35, 1.75)
PLAYER_AUCTION_SPIKE_CHANCE = 0.25
PLAYER_AUCTION_SPIKE_RANGE = (0.40, 2.00)
PLAYER_AUCTION_FLOOR = 50

# --- Credit line ---
# (minimum reputation, credit limit, interest rate)
CREDIT_TIERS = [
    (80, 15000, 0.12),
    (65, 10000, 0.15),
    (50, 7500, 0.20),
    (30, 4000, 0.28),
]
LOAN_TERM_DAYS = 3
LOAN_DEFAULT_REP_LOSS = 6
GARNISH_RATE = 0.30

# --- Jam duels ---
DUEL_OPTIONS = [
    {
        'id': 'shred',
        'label': "Shred a blistering run",
        'player_bonus': 6,
        'variance': 26,
        'rep_bonus': 1,
        'reaction': "Fingers fly. Half the crowd winces, half goes wild.",
    },
    {
        'id': 'blues',
        'label': "Bend a slow blues lick",
        'player_bonus': 9,
        'variance': 14,
        'rep_bonus': 1,
        'reaction': "One long bend and the sidewalk goes quiet.",
    },
    {
        'id': 'rhythm',
        'label': "Lock into a tight rhythm groove",
        'player_bonus': 11,
        'variance': 8,
        'rep_bonus': 0,
        'reaction': "Heads start nodding. Steady wins friends.",
    },
    {
        'id': 'crowd',
        'label': "Play to the crowd",
        'player_bonus': 4,
        'variance': 30,
        'rep_bonus': 2,
        'reaction': "You hop the curb and point at a stranger. Bold.",
    },
]

DUEL_CHALLENGERS = [
    {
        'id': 'busker',
        'label': "Corner Busker",
        'intro': "A busker with a battered Tele nods at your case. 'Trade licks?'",
        'base_skill': 22,
        'total_rounds': 1,
        'wager': 50,
        'rep_bonus': 1,
        'rep_loss': 1,
        'reward_chance': 0.25,
        'reward': 'listing',
        'signature': {
            'id': 'busker_hat',
            'label': "Play for the tip hat",
            'player_bonus': 8,
            'variance': 18,
            'rep_bonus': 1,
            'reaction': "Coins clink into the hat. The busker grins.",
        },
    },
    {
        'id': 'session_ace',
        'label': "Session Ace",
        'intro': "A session player sets down a pedalboard worth more than your rent.",
        'base_skill': 30,
        'total_rounds': 2,
        'wager': 150,
        'rep_bonus': 2,
        'rep_loss': 2,
        'reward_chance': 0.3,
        'reward': 'item',
        'signature': {
            'id': 'session_chart',
            'label': "Sight-read their chart",
            'player_bonus': 12,
            'variance': 10,
            'rep_bonus': 1,
            'reaction': "You nail the chart cold. The ace raises an eyebrow.",
        },
    },
    {
        'id': 'metal_kid',
        'label': "Metal Prodigy",
        'intro': "A teenager with a seven-string challenges you to a speed duel.",
        'base_skill': 34,
        'total_rounds': 3,
        'wager': 250,
        'rep_bonus': 3,
        'rep_loss': 2,
        'reward_chance': 0.35,
        'reward': 'listing',
        'signature': {
            'id': 'metal_sweep',
            'label': "Match the sweep arpeggios",
            'player_bonus': 10,
            'variance': 24,
            'rep_bonus': 2,
            'reaction': "Sweeps collide mid-air. Someone starts a tiny pit.",
        },
    },
    {
        'id': 'legend',
        'label': "Old Road Legend",
        'intro': "An old touring legend steps out of a van. 'Show me what you got, kid.'",
        'base_skill': 40,
        'total_rounds': 4,
        'wager': 400,
        'rep_bonus': 5,
        'rep_loss': 3,
        'reward_chance': 0.4,
        'reward': 'item',
        'signature': {
            'id': 'legend_trade',
            'label': "Trade fours like it's 1974",
            'player_bonus': 13,
            'variance': 16,
            'rep_bonus': 2,
            'reaction': "Call and response. The legend laughs out loud.",
        },
    },
]

DUEL_WIN_MARGIN = 8
DUEL_OPPONENT_SPREAD = 28
DUEL_ACCURACY_DAMPING = 0.45
DUEL_GEAR_GUITAR = 6
DUEL_GEAR_AMP = 4
DUEL_HEAT_PENALTY = {'High': 10, 'Medium': 5, 'Low': 0}
DUEL_DECLINE_REP_LOSS = 1

# Single-use boosts bought from the daily performance market.
PERFORMANCE_ITEMS = [
    {
        'id': 'lucky_pick',
        'name': "Lucky Tortex Pick",
        'description': "+4 steady, no surprises",
        'price': 40,
        'player_bonus': 4,
        'variance': 0,
        'opponent_penalty': 0,
        'rep_bonus': 0,
    },
    {
        'id': 'fresh_strings',
        'name': "Fresh Set of Strings",
        'description': "+6, a little extra sparkle",
        'price': 60,
        'player_bonus': 6,
        'variance': 4,
        'opponent_penalty': 0,
        'rep_bonus': 0,
    },
    {
        'id': 'boutique_fuzz',
        'name': "Boutique Fuzz Clip-On",
        'description': "Wild card: big swings",
        'price': 90,
        'player_bonus': 3,
        'variance': 18,
        'opponent_penalty': 0,
        'rep_bonus': 1,
    },
    {
        'id': 'stage_fog',
        'name': "Pocket Fog Machine",
        'description': "Rattles the other player (-6 opponent)",
        'price': 120,
        'player_bonus': 0,
        'variance': 0,
        'opponent_penalty': 6,
        'rep_bonus': 1,
    },
    {
        'id': 'vintage_cable',
        'name': "Vintage Coil Cable",
        'description': "+5 and the crowd notices",
        'price': 80,
        'player_bonus': 5,
        'variance': 2,
        'opponent_penalty': 2,
        'rep_bonus': 1,
    },
]

PERFORMANCE_MARKET_SIZE = 2
