"""
This script benchmarks the runtime of key generation, encryption, decryption and homomorphic
addition for different key lengths.

Assuming you have installed the package with the 'bench' extra into your Python environment, you
can run this script as follows:
`python scripts/bench_key_length.py --key-lengths 512,1024,2048 --iterations 20 --operands 10`
"""

import argparse
import logging
import os
import time
from dataclasses import dataclass, field

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from tno.mpc.protocols.paillier_bytes import generate_key_pair, int_to_bytes

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)
logging.getLogger("tno.mpc.protocols.paillier_bytes").setLevel(logging.INFO)

# Benchmark parameters
KEY_LENGTHS = [512, 1024, 2048]
ITERATIONS = 20
# Number of ciphertexts that are added in a single homomorphic_add_many call
OPERANDS = 10

OPERATIONS = ["keygen", "encrypt", "decrypt", "homomorphic_add_many"]

# Ensure out directory exists
os.makedirs("out", exist_ok=True)


@dataclass
class BenchmarkState:
    runtimes: dict[str, list[float]] = field(
        default_factory=lambda: {operation: [] for operation in OPERATIONS}
    )
    """Runtime in seconds of every iteration, per operation."""

    def record(self, operation, start_time):
        self.runtimes[operation].append(time.perf_counter() - start_time)


def benchmark_iteration(key_length, state):
    """Run every operation once for a fresh key of the given length."""
    start_time = time.perf_counter()
    public_key, private_key = generate_key_pair(key_length)
    state.record("keygen", start_time)

    ciphertexts = []
    for plaintext in range(OPERANDS):
        start_time = time.perf_counter()
        ciphertexts.append(public_key.encrypt(int_to_bytes(plaintext)))
        state.record("encrypt", start_time)

    start_time = time.perf_counter()
    total = public_key.homomorphic_add_many(*ciphertexts)
    state.record("homomorphic_add_many", start_time)

    start_time = time.perf_counter()
    private_key.decrypt(total)
    state.record("decrypt", start_time)


def run_benchmark():
    # This dictionary contains a BenchmarkState object for each key length
    benchmark_states: dict[int, BenchmarkState] = {
        key_length: BenchmarkState() for key_length in KEY_LENGTHS
    }

    with logging_redirect_tqdm():
        for key_length in tqdm(KEY_LENGTHS, desc="Key lengths", ncols=70):
            for _ in tqdm(
                range(ITERATIONS),
                desc=f"Key length {key_length}",
                leave=False,
                ncols=70,
            ):
                benchmark_iteration(key_length, benchmark_states[key_length])

    df_time = pd.DataFrame(
        [
            (key_length, operation, runtime)
            for key_length, state in benchmark_states.items()
            for operation, runtimes in state.runtimes.items()
            for runtime in runtimes
        ],
        columns=["KeyLength", "Operation", "Time"],
    )
    summary = df_time.groupby(["KeyLength", "Operation"])["Time"].describe()
    summary.to_csv("out/runtimes.csv")
    logger.info(f"Runtimes in seconds:\n{summary[['mean', 'std', 'min', 'max']]}")
    logger.info(f"Saved {os.getcwd()}/out/runtimes.csv")

    sns.lineplot(
        x="KeyLength", y="Time", hue="Operation", data=df_time, errorbar="sd"
    )
    plt.ylabel("Time (s)")
    plt.yscale("log")
    plt.savefig("out/plot_time.png")
    logger.info(f"Saved {os.getcwd()}/out/plot_time.png")
    plt.clf()


def main():
    global KEY_LENGTHS, ITERATIONS, OPERANDS

    parser = argparse.ArgumentParser(
        description="Benchmark the Paillier operations for different key lengths."
    )
    parser.add_argument(
        "--key-lengths",
        type=lambda s: [int(item) for item in s.split(",")],
        default=KEY_LENGTHS,
        help="Key lengths. Pass a comma-separated list without spaces, like: 512,1024",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=ITERATIONS,
        help="The number of fresh key pairs to benchmark for each key length.",
    )
    parser.add_argument(
        "--operands",
        type=int,
        default=OPERANDS,
        help="The number of ciphertexts to encrypt and add per iteration.",
    )
    args = parser.parse_args()

    KEY_LENGTHS = args.key_lengths
    ITERATIONS = args.iterations
    OPERANDS = args.operands

    run_benchmark()


if __name__ == "__main__":
    main()
