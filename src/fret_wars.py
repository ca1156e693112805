from catalog_data import BAG_TIERS, LOCATIONS, PERFORMANCE_ITEMS, TOOL_COSTS, TOOL_LABELS
from game_engine import GameEngine
from market_engine import sell_price
from migration_runner import run_all_pending
from scoring import calculate_score, share_text
from setup_sqlite import create_database, get_db_path

SAVE_KEY = 'cli'

ENCOUNTER_MENUS = {
    'bulk_lot': [('A', 'Accept lot', 'bulk_accept'), ('D', 'Decline', 'bulk_decline')],
    'trade_offer': [('A', 'Accept trade', 'trade_accept'), ('D', 'Decline', 'trade_decline')],
    'mysterious_listing': [('P', 'Ask for proof', 'mystery_proof'), ('B', 'Buy', 'mystery_buy'),
                           ('D', 'Pass', 'mystery_pass')],
    'world_auction': [('B', 'Place max bid', 'auction_bid'), ('D', 'Pass', 'auction_pass')],
    'repair_scare': [('A', 'Take the discount', 'repair_comp'), ('D', 'Refuse', 'repair_refuse')],
}


def print_new_messages(state, seen):
    for message in state.messages:
        if message.id not in seen:
            seen.add(message.id)
            print(f"  [{message.type.upper()}] {message.text}")


def print_status(state):
    print("\n================== FRET WARS ==================")
    print(f"Day {state.day}/{state.total_days} - {state.location}")
    print(f"Cash: ${state.cash:,}   Rep: {state.reputation}   Heat: {state.heat_level} ({state.total_heat})")
    print(f"Bag: {BAG_TIERS[state.bag_tier][0]} {state.slots_used}/{state.inventory_capacity} slots")
    if state.credit.loan is not None:
        loan = state.credit.loan
        print(f"Loan: ${loan.balance_due:,} due day {loan.due_day}")

    print("--- Market ---")
    for index, listing in enumerate(state.market, 1):
        print(f"  {index}. {listing.name} [{listing.condition}, {listing.rarity}] "
              f"${listing.price_today:,} {listing.trend} ({listing.slots} slot)")

    print("--- Inventory ---")
    if not state.inventory:
        print("  (empty)")
    for index, item in enumerate(state.inventory, 1):
        status = f" - {item.busy_reason}" if item.is_busy else ""
        print(f"  {index}. {item.name} [{item.condition}] paid ${item.purchase_price:,}, "
              f"sells ${sell_price(item, state.market, state.reputation):,}{status}")
    print(f"Score if you stopped now: ${calculate_score(state):,}")
    print("===============================================")


def pick(items, prompt):
    """Ask for a 1-based index into items; None on bad input."""
    if not items:
        print("Nothing to choose from.")
        return None
    try:
        index = int(input(prompt))
    except ValueError:
        print("Invalid number.")
        return None
    if not 1 <= index <= len(items):
        print("Invalid choice.")
        return None
    return items[index - 1]


def handle_market_action(engine, state, action):
    listing = pick(state.market, "Listing #: ")
    if listing is None:
        return state
    params = {'item_id': listing.id}
    if action == 'buy' and state.tools.insurance_plan:
        params['insure'] = input("Insure it? (y/n): ").lower() == 'y'
    return engine.perform(SAVE_KEY, action, **params)


def handle_inventory_action(engine, state, action):
    item = pick(state.inventory, "Item #: ")
    if item is None:
        return state
    params = {'item_id': item.id}
    if action == 'luthier':
        target = input("Target condition (Player/Mint, blank for next step up): ").strip()
        if target:
            params['target'] = target
    return engine.perform(SAVE_KEY, action, **params)


def handle_travel(engine, state):
    for index, location in enumerate(LOCATIONS, 1):
        here = " (you are here)" if location['name'] == state.location else ""
        print(f"  {index}. {location['name']} - {location['travel_time']}h{here}")
    location = pick(LOCATIONS, "Travel to #: ")
    if location is None:
        return state
    return engine.perform(SAVE_KEY, 'travel', location=location['name'])


def handle_shop(engine, state):
    print("\n--- Shop ---")
    for tool, cost in TOOL_COSTS.items():
        owned = " (owned)" if getattr(state.tools, tool) else ""
        print(f"  {tool}: {TOOL_LABELS[tool]} ${cost:,}{owned}")
    if state.bag_tier + 1 in BAG_TIERS:
        label, capacity, cost = BAG_TIERS[state.bag_tier + 1]
        print(f"  bag: {label} ({capacity} slots) ${cost:,}")
    for perf in state.performance_market:
        print(f"  {perf.id}: {perf.name} ${perf.price:,} - {perf.description}")

    choice = input("Buy what? (blank to cancel): ").strip()
    if not choice:
        return state
    if choice == 'bag':
        return engine.perform(SAVE_KEY, 'bag')
    if choice in TOOL_COSTS:
        return engine.perform(SAVE_KEY, 'tool', tool=choice)
    if choice in {perf['id'] for perf in PERFORMANCE_ITEMS}:
        return engine.perform(SAVE_KEY, 'performance_buy', perf_id=choice)
    print("Unknown item.")
    return state


def handle_credit(engine, state):
    try:
        if state.credit.loan is None:
            amount = int(input("Borrow how much? $"))
            return engine.perform(SAVE_KEY, 'loan_draw', amount=amount)
        amount = int(input("Repay how much? $"))
        return engine.perform(SAVE_KEY, 'loan_repay', amount=amount)
    except ValueError:
        print("Invalid amount.")
        return state


def handle_encounter(engine, state):
    encounter = state.pending_encounter
    menu = ENCOUNTER_MENUS[encounter.kind]
    print("\n*** " + encounter.kind.replace('_', ' ').upper() + " ***")
    for key, label, _ in menu:
        print(f"[{key}] {label}", end="  ")
    print()
    choice = input("> ").upper()
    for key, _, action in menu:
        if choice == key:
            if action == 'auction_bid':
                try:
                    max_bid = int(input(f"Starting bid ${encounter.starting_bid:,}. Your max bid: $"))
                except ValueError:
                    max_bid = 0
                return engine.perform(SAVE_KEY, action, max_bid=max_bid)
            return engine.perform(SAVE_KEY, action)
    print("Invalid command.")
    return state


def handle_duel(engine, state):
    duel = state.pending_duel
    print(f"\n*** DUEL: {duel.challenger_label} - round {duel.round}/{duel.total_rounds} ***")
    print(f"Score {duel.player_score:.0f} vs {duel.opponent_score:.0f}   Wager: "
          f"{'$' + format(duel.wager, ',') if duel.wager_accepted else 'declined'}")

    if duel.phase == 'meter':
        try:
            accuracy = float(input("Timing accuracy (0.0 - 1.0): "))
        except ValueError:
            accuracy = 0.0
        return engine.perform(SAVE_KEY, 'duel_timing', accuracy=accuracy)

    for index, option in enumerate(duel.options, 1):
        print(f"  {index}. {option.label}")
    if duel.round == 1:
        print("  W. Toggle wager   D. Decline")
    choice = input("> ").upper()
    if choice == 'W':
        return engine.perform(SAVE_KEY, 'duel_wager')
    if choice == 'D':
        return engine.perform(SAVE_KEY, 'duel_decline')
    try:
        option = duel.options[int(choice) - 1]
    except (ValueError, IndexError):
        print("Invalid choice.")
        return state
    params = {'option_id': option.id}
    if state.performance_items:
        boost = input("Use a boost? (" + ", ".join(p.id for p in state.performance_items) + ", blank for none): ")
        if boost.strip():
            params['boost_id'] = boost.strip()
    return engine.perform(SAVE_KEY, 'duel_choose', **params)


def main():
    print("==============================================")
    print("              Welcome to Fret Wars            ")
    print("==============================================")
    db_path = get_db_path()
    create_database(db_path, quiet=True)
    run_all_pending(db_path)
    engine = GameEngine(db_path)

    state = engine.get_or_create(SAVE_KEY)
    seen = set()
    print_new_messages(state, seen)

    while True:
        if state.is_game_over:
            print("\n" + share_text(state))
            if input("Start a new run? (y/n): ").lower() != 'y':
                break
            state = engine.new_run(SAVE_KEY)
            print_new_messages(state, seen)
            continue

        if state.pending_duel is not None:
            state = handle_duel(engine, state)
            print_new_messages(state, seen)
            continue
        if state.pending_encounter is not None:
            state = handle_encounter(engine, state)
            print_new_messages(state, seen)
            continue

        print_status(state)
        print("\n--- Main Menu ---")
        print("[B]uy      [P]roof      [S]ell       a[U]thenticate  [L]uthier")
        print("[A]uction  [T]ravel     [E]nd day    s[H]op          [C]redit")
        print("[N]ew run  [Q]uit")

        action = input("> ").upper()

        if action == 'B': state = handle_market_action(engine, state, 'buy')
        elif action == 'P': state = handle_market_action(engine, state, 'proof')
        elif action == 'S': state = handle_inventory_action(engine, state, 'sell')
        elif action == 'U': state = handle_inventory_action(engine, state, 'authenticate')
        elif action == 'L': state = handle_inventory_action(engine, state, 'luthier')
        elif action == 'A': state = handle_inventory_action(engine, state, 'auction_list')
        elif action == 'T': state = handle_travel(engine, state)
        elif action == 'E': state = engine.perform(SAVE_KEY, 'end_day')
        elif action == 'H': state = handle_shop(engine, state)
        elif action == 'C': state = handle_credit(engine, state)
        elif action == 'N':
            try:
                days = int(input("Run length in days (21 is ranked): ") or 21)
            except ValueError:
                print("Invalid number.")
                continue
            state = engine.new_run(SAVE_KEY, days)
        elif action == 'Q':
            break
        else:
            print("Invalid command.")

        print_new_messages(state, seen)


if __name__ == "__main__":
    main()
