#!/usr/bin/env python3
"""
Example usage of the avatarlife package.
"""

from avatarlife import AvatarLife, Board, PatternLibrary


def main():
    """Demonstrate programmatic usage of the avatarlife package."""
    library = PatternLibrary()
    game = AvatarLife(Board())

    face = library.get_pattern("Avatar")
    if face:
        game.seed(face, offset_x=2, offset_y=2)

        print("Initial state:")
        print(game.board)
        print(f"Population: {game.population}")
        print()

        # The host page drives this from a timer; here we just loop
        for _ in range(10):
            game.step()
            print(f"Generation {game.generation}:")
            print(game.board)
            print(f"Population: {game.population}")

            if game.cycle_detected:
                print(f"Cycle detected! Length: {game.cycle_length}")
                break

            print()

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
