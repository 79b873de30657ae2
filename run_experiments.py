#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(cmd):
    print("Running:", cmd)
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run(f"{sys.executable} -m tileclimb.experiments.runner --algo hc --size 3 --out results/hc_3x3.csv")
    run(f"{sys.executable} -m tileclimb.experiments.runner --algo sa --size 3 --out results/sa_3x3.csv")
    run(f"{sys.executable} -m tileclimb.experiments.plot results/hc_3x3.csv results/sa_3x3.csv --save results/plots")

if __name__ == "__main__":
    main()
