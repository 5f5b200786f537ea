import argparse
import time

from lookahead2048.driver import GameStatus, TurnLoop
from lookahead2048.search import DEFAULT_DEPTH, RandomStrategy, Searcher
from lookahead2048.simulator import LocalGame


def make_strategy(name, depth, seed=None):
    if name == 'random':
        return RandomStrategy(seed)
    return Searcher(depth)


def run_game(strategy, seed=None, max_turns=None, verbose=False):
    """Run a single local game and return results"""
    session = LocalGame(seed=seed)
    loop = TurnLoop(session, strategy, max_turns=max_turns, verbose=verbose)
    result = loop.run()

    if verbose:
        print(session)

    return {
        'score': session.score,
        'max_tile': session.board.max_tile(),
        'turns': result.turns,
        'status': result.status,
        'reason': result.reason,
    }


def evaluate_strategy(strategy_name, games, depth, seed=None, max_turns=None, verbose=False):
    """Run multiple games and collect statistics"""
    print(f"Evaluating {strategy_name} (depth {depth}) for {games} games")

    strategy = make_strategy(strategy_name, depth, seed)
    results = []
    start_time = time.time()

    for i in range(games):
        if verbose:
            print(f"\nGame {i+1}/{games}")
        else:
            print(f"Running game {i+1}/{games}...", end='\r')

        game_seed = None if seed is None else seed + i
        results.append(run_game(strategy, game_seed, max_turns, verbose))

    scores = [r['score'] for r in results]
    wins = sum(1 for r in results if r['status'] is GameStatus.WON)
    total_time = time.time() - start_time

    print("\n" + "=" * 50)
    print("EVALUATION RESULTS")
    print("=" * 50)
    print(f"Games played: {games}")
    print(f"Games won: {wins}")
    print(f"Average score: {sum(scores) / len(scores):.1f}")
    print(f"Top score: {max(scores)}")
    print(f"Average turns per game: {sum(r['turns'] for r in results) / games:.1f}")
    print(f"Total evaluation time: {total_time:.1f}s")

    if isinstance(strategy, Searcher):
        print(f"Boards simulated: {strategy.stats.nodes} ({strategy.stats.pruned} no-op)")

    print("\nMax tile distribution:")
    tile_counts = {}
    for r in results:
        tile_counts[r['max_tile']] = tile_counts.get(r['max_tile'], 0) + 1
    for tile, count in sorted(tile_counts.items()):
        print(f"  {tile}: {count} games ({count / games * 100:.1f}%)")

    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play 2048 locally with a lookahead bot")
    parser.add_argument("--strategy", choices=["lookahead", "random"], default="lookahead")
    parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Moves to look ahead")
    parser.add_argument("--games", type=int, default=1, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Show every move")

    args = parser.parse_args(argv)
    if args.depth < 1:
        parser.error("--depth must be at least 1")
    if args.games < 1:
        parser.error("--games must be at least 1")

    return evaluate_strategy(args.strategy, args.games, args.depth, args.seed, args.max_turns, args.verbose)


if __name__ == "__main__":
    main()
