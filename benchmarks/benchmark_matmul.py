import intmat

import numpy as np


class Matmul_Sparse:
    params = (["object", "int64"], [0.01, 0.1])

    def setup(self, dtype, density):
        rng = np.random.default_rng(0)
        self.x = intmat.random(100, 100, density=density, random_state=rng, dtype=dtype)
        self.y = intmat.random(100, 100, density=density, random_state=rng, dtype=dtype)

    def time_matmul(self, dtype, density):
        self.x @ self.y

    def time_matmul_views(self, dtype, density):
        self.x.slice(10, 10, 50, 50).T @ self.y.slice(20, 0, 50, 80)


class Power:
    params = [2, 8, 33]

    def setup(self, k):
        rng = np.random.default_rng(0)
        self.x = intmat.random(50, 50, density=0.05, random_state=rng)

    def time_pow(self, k):
        self.x**k


class Add_Sparse:
    def setup(self):
        rng = np.random.default_rng(0)
        self.x = intmat.random(500, 500, density=0.01, random_state=rng)
        self.y = intmat.random(500, 500, density=0.01, random_state=rng)

    def time_add(self):
        self.x + self.y
