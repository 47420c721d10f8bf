#!/usr/bin/env python3
"""
Baby Brain Chatbot - talk to a brain that starts knowing six words

Everything it says it learned from you:
- Words you use become neurons
- Words you use together become synapses
- Praise (oui, bravo, mdr...) floods dopamine and strengthens what it said
- Rejection (non, nul, stop...) raises stress and inhibits it

Run with: python chatbot.py [--brain-path baby_brain.brain]
"""

import argparse
import os
import sys

from babybrain import Brain, BrainPersistence, Conversation, create_config, setup_logging
from babybrain.config import PRESETS
from babybrain.persistence import DEFAULT_BRAIN_PATH


class Colors:
    """ANSI color codes for terminal output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'
    WHITE = '\033[97m'


def clear_screen():
    """Clear terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def make_bar(value: float, width: int = 20, filled: str = '█', empty: str = '░') -> str:
    """Create a progress bar"""
    filled_count = int(max(0.0, min(1.0, value)) * width)
    return filled * filled_count + empty * (width - filled_count)


def colorize_level(value: float) -> str:
    """Color a value based on its level"""
    if value > 0.7:
        return Colors.RED
    elif value > 0.5:
        return Colors.YELLOW
    elif value > 0.3:
        return Colors.GREEN
    else:
        return Colors.CYAN


def print_chemicals(brain: Brain) -> None:
    data = brain.get_dashboard_data()
    print(f"\n{Colors.BOLD}Hormones:{Colors.RESET}")
    for chem, level in data['chemicals'].items():
        color = colorize_level(level)
        print(f"  {chem:15} {color}[{make_bar(level)}]{Colors.RESET} {level:.2f}")
    print(f"\n  Mood: {Colors.YELLOW}{data['mood']}{Colors.RESET}\n")


def print_dashboard(conversation: Conversation) -> None:
    """Print the brain status dashboard"""
    brain = conversation.brain
    data = brain.get_dashboard_data()

    print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}  BABY BRAIN STATUS{Colors.RESET}")
    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")

    print_chemicals(brain)

    neurons = data['neurons']
    synapses = data['synapses']
    print(f"  {Colors.BOLD}Network:{Colors.RESET}")
    print(f"    Neurons:           {neurons['total']:,}")
    print(f"    Active (v > 0.9):  {neurons['active']:,}")
    print(f"    Refractory:        {neurons['refractory']:,}")
    print(f"    Mean threshold:    {neurons['mean_threshold']:.3f}")
    print(f"    Synapses:          {synapses['total']:,}")
    print(f"      excitatory:      {synapses['excitatory']:,}")
    print(f"      inhibitory:      {synapses['inhibitory']:,}")
    print()

    strongest = brain.strongest_synapses(5)
    if strongest:
        print(f"  {Colors.BOLD}Strongest associations:{Colors.RESET}")
        for (a, b), syn in strongest:
            print(f"    {a} <-> {b}: {syn.signed_weight:+.3f} ({syn.neurotransmitter})")
        print()

    print(f"  {Colors.DIM}Interactions: {conversation.interaction_count} | "
          f"Ticks: {data['ticks']}{Colors.RESET}")
    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}\n")


def print_help():
    """Print help information"""
    print(f"""
{Colors.BOLD}Baby Brain Chatbot - Commands{Colors.RESET}

  {Colors.CYAN}/status{Colors.RESET}      - Show brain status dashboard
  {Colors.CYAN}/chemicals{Colors.RESET}   - Show hormone levels
  {Colors.CYAN}/save{Colors.RESET}        - Save brain state now
  {Colors.CYAN}/reset{Colors.RESET}       - Forget everything
  {Colors.CYAN}/clear{Colors.RESET}       - Clear the screen
  {Colors.CYAN}/help{Colors.RESET}        - Show this help
  {Colors.CYAN}/quit{Colors.RESET}        - Exit the chatbot

Just type naturally. It learns everything, even the bad stuff.
""")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Talk to a brain that learns online.")
    parser.add_argument("--brain-path", default=DEFAULT_BRAIN_PATH,
                        help="Snapshot file (.brain for dill, .json for JSON)")
    parser.add_argument("--preset", default="baby", choices=sorted(PRESETS),
                        help="Configuration preset")
    parser.add_argument("--ticks", type=int, default=None,
                        help="Maximum ticks per interaction")
    parser.add_argument("--log-level", default="WARNING",
                        help="DEBUG shows every tick")
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def main(argv=None):
    """Main chatbot loop"""
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    config = create_config(args.preset)
    persistence = BrainPersistence(args.brain_path, config=config)
    conversation = Conversation(persistence=persistence, max_ticks=args.ticks)

    print(f"""
{Colors.BOLD}{Colors.CYAN}🍼 Bébé neuronal réveillé.{Colors.RESET}
Parle-lui. Ctrl+C pour arrêter.
{Colors.DIM}{len(conversation.brain.neurons)} neurons, {len(conversation.brain.synapses)} synapses.
Type /help for commands.{Colors.RESET}
""")

    while True:
        try:
            user_input = input(f"{Colors.GREEN}Toi >{Colors.RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            break

        if not user_input:
            continue

        cmd = user_input.lower().split()[0]

        if cmd in ['/quit', '/exit', '/q']:
            break
        elif cmd == '/status':
            print_dashboard(conversation)
            continue
        elif cmd == '/chemicals':
            print_chemicals(conversation.brain)
            continue
        elif cmd == '/clear':
            clear_screen()
            continue
        elif cmd == '/help':
            print_help()
            continue

        result = conversation.handle(user_input)
        if result is None:
            continue

        print(f"{Colors.MAGENTA}{Colors.BOLD}Lui >{Colors.RESET} {result.reply}")
        if result.command is None:
            print(f"{Colors.DIM}  [Mood: {result.mood} | Ticks: {result.ticks} | "
                  f"Spikes: {result.spikes}]{Colors.RESET}")

    conversation.save()
    print(f"{Colors.CYAN}Bébé s'endort après {conversation.interaction_count} échanges.{Colors.RESET}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
