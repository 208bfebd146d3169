#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--difficulty D] [--hints] [--seed N]
    python main.py evaluate [--agent {random,hint}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
from typing import Callable

import numpy as np

from minefield import Board, DIFFICULTIES
from minefield.render import render_board, render_percentages
from agents import RandomAgent, HintAgent
from evaluation import Evaluator

PLAY_HELP = """Commands:
  open X Y    open the cell in column X, row Y
  flag X Y    toggle a flag
  hint        suggest a cell to open
  auto        open every cell deduced safe
  odds        show mine percentages
  quit        leave the game"""


def ask_yes_no(prompt: str) -> bool:
    """Default yes/no decision callback for the terminal."""
    return input(f"{prompt} [y/n] ").strip().lower() in {"y", "yes"}


def play_game(board: Board, show_hints: bool = False) -> bool:
    """
    Play one game in the terminal.

    Returns:
        False if the player quit, True once the game ended.
    """
    print(PLAY_HELP)
    while board.is_playing:
        print(f"\nMines left: {board.remaining_mine_count}")
        print(render_board(board, show_hints=show_hints))

        parts = input("> ").replace(",", " ").split()
        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]

        if command in {"q", "quit", "exit"}:
            return False
        if command == "hint":
            print(f"Try {board.hint()}")
            continue
        if command == "auto":
            print(f"Opened {board.open_safe_cells()} cells")
            continue
        if command == "odds":
            print(render_percentages(board))
            continue
        if command not in {"open", "flag"} or len(args) != 2:
            print("Invalid input. Example: open 3 5")
            continue

        try:
            x, y = int(args[0]), int(args[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue
        if not board.grid.contains(x, y):
            print(f"({x}, {y}) is outside the board.")
            continue

        if command == "open":
            board.open(x, y)
        else:
            board.toggle_flag(x, y)

    print()
    print(render_board(board))
    if board.is_won:
        print("Congratulations... You won!")
    else:
        print("Unlucky... you opened a mine!")
    return True


def play(
    args: argparse.Namespace,
    ask: Callable[[str], bool] = ask_yes_no,
) -> None:
    """Run terminal games until the player declines to continue."""
    config = DIFFICULTIES[args.difficulty]
    board = Board(config, rng=np.random.default_rng(args.seed))

    while play_game(board, show_hints=args.hints):
        if not ask("Would you like to play again?"):
            return
        board.reset()


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a specific agent."""
    config = DIFFICULTIES[args.difficulty]

    if args.agent == "random":
        agent = RandomAgent(config.height, config.width, seed=args.seed)
        name = "Random"
    else:
        agent = HintAgent(config.height, config.width)
        name = "Hint"

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {name} over {args.games} games...")
    results = evaluator.evaluate(agent)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents."""
    config = DIFFICULTIES[args.difficulty]

    agents = {
        "Random": RandomAgent(config.height, config.width, seed=args.seed),
        "Hint": HintAgent(config.height, config.width),
    }

    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(agents)

    print("\n" + "=" * 44)
    print("Agent Comparison Results")
    print("=" * 44)
    print(f"{'Agent':<12} {'Win Rate':<10} {'Avg Steps':<10} {'Avg Revealed':<12}")
    print("-" * 44)

    for name, metrics in results.items():
        print(
            f"{name:<12} {metrics['win_rate']:>8.1%} "
            f"{metrics['avg_steps']:>10.1f} "
            f"{metrics['avg_revealed']:>12.1f}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - deduction puzzle engine"
    )
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="intermediate",
        help="Board preset",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--hints", action="store_true", help="Mark deduced safe/mine cells"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    eval_parser.add_argument(
        "--agent",
        choices=["random", "hint"],
        default="hint",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
