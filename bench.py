import cProfile
import pstats

from currystep import L, V, evaluate


def main():
    succ = L("n", "f", "x", V("f")(V("n")(V("f"))(V("x"))))
    zero = L("f", "x", "x")

    term = zero
    for i in range(12):
        term = succ(term)
        evaluate(term)


if __name__ == "__main__":
    with cProfile.Profile() as profile:
        main()
        print("bench done")
        results = pstats.Stats(profile)
        results.sort_stats(pstats.SortKey.TIME)
        results.dump_stats("results.profile")
