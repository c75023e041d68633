# optsolvers

Line-search based solvers for smooth optimization problems, with and without
simple box constraints. Everything works on NumPy vectors.

The package root only carries the version; import from the modules listed
below.

## Modules

| Module | Contents |
| --- | --- |
| `optsolvers.func_eval` | `FuncEval`: value `f`, gradient `g`, optional `hessian` |
| `optsolvers.number` | `box_projection(x, lower_bound, upper_bound)`, `infinity_norm(x)` |
| `optsolvers.solver` | `LineSearchSolver`, `BoundedSolver`, `SolverError` and its subclasses `MaxIterReached`, `OutOfDomain`, `InvalidInputParams`, `AbnormalTermination` |
| `optsolvers.line_search` | `LineSearch`, `SufficientDecreaseCondition`, `CurvatureCondition`, `WolfeConditions`, `NoSearch` |
| `optsolvers.backtracking` | `BackTracking`, `BackTrackingB` |
| `optsolvers.gll_quadratic` | `GLLQuadratic` |
| `optsolvers.more_thuente` | `MoreThuente` and its helpers `cubic_minimizer`, `quadratic_minimizer_1`, `quadratic_minimizer_2`, `update_interval`, `phi` |
| `optsolvers.more_thuente_b` | `MoreThuenteB` |
| `optsolvers.newton` | `Newton` |
| `optsolvers.projected_newton` | `ProjectedNewton` |
| `optsolvers.spectral_projected_newton` | `SpectralProjectedNewton` |
| `optsolvers.osgmg` | `minimize_osgmg`, `DiagonalPattern`, `DensePattern` |
| `optsolvers.plotter` | `Plotter3d` |

### Line searches

All provide `compute_step_len(x_k, eval_x_k, direction_k, oracle, max_iter)`
and return a step length.

- `NoSearch()` – always returns `1.0`.
- `BackTracking(c1, beta)` – starts at `t = 1` and multiplies by `beta` until
  the Armijo condition holds; a non-finite trial value also shrinks the step.
- `BackTrackingB(c1, beta, lower_bound, upper_bound)` – the same, but each trial
  point is projected onto the box and tested with a projected Armijo rule.
- `GLLQuadratic(c1, m)` – non-monotone Armijo search against the largest of the
  last `m` function values, with safeguarded quadratic interpolation
  (`with_sigmas(sigma1, sigma2)`, defaults 0.1 and 0.9).
- `MoreThuente()` – strong-Wolfe search (defaults `c1=1e-4`, `c2=0.9`,
  `t_min=0`, `t_max=inf`); configure with `with_c1`, `with_c2`, `with_t_min`,
  `with_t_max`, `with_deltas`. `with_c1`/`with_c2` raise `ValueError` on
  invalid values.
- `MoreThuenteB(n)` – as `MoreThuente`, with bounds set by `with_lower_bound`
  and `with_upper_bound`; before each search `t_max` is lowered to the largest
  step that stays inside the box, and the lowered value is kept.

### Solvers

All derive from `LineSearchSolver` and run with
`minimize(line_search, oracle, max_iter_solver, max_iter_line_search, callback)`.
The current iterate is `solver.x` and the iteration count `solver.k`.

- `Newton(tol, x0)` – Newton direction; stops when half the squared Newton
  decrement is below `tol`. A singular Hessian falls back to the negative
  gradient.
- `ProjectedNewton(grad_tol, x0, lower_bound, upper_bound)` – Newton step
  (via Cholesky) projected onto the box; stops when the step, the change in
  gradient, or the infinity norm of the projected gradient falls below
  `grad_tol`.
- `SpectralProjectedNewton(grad_tol, x0, oracle, lower_bound, upper_bound)` –
  projected Newton step scaled by a Barzilai–Borwein factor `lambda_` kept in
  `[lambda_min, lambda_max]` (`with_lambdas`, defaults `1e-3` and `1e3`).

The Newton-type solvers need a Hessian in every evaluation and raise
`ValueError` when it is missing; the projected ones also raise `ValueError`
when the Hessian is not positive definite.

## Installation

```
pip install .
```

## Oracles

An oracle is any callable that takes a NumPy vector and returns a `FuncEval`.

```python
import numpy as np
from optsolvers.func_eval import FuncEval

gamma = 90.0

def oracle(x):
    f = 0.5 * (x[0] ** 2 + gamma * x[1] ** 2)
    g = np.array([x[0], gamma * x[1]])
    return FuncEval(f, g).with_hessian(np.diag([1.0, gamma]))
```

`take_hessian()` removes the Hessian from an evaluation and returns it
(raising `ValueError` if there is none).

## Minimizing

```python
from optsolvers.more_thuente import MoreThuente
from optsolvers.newton import Newton

solver = Newton(1e-8, np.array([1.0, 1.0]))
solver.minimize(MoreThuente(), oracle, 1000, 100, None)
print(solver.x)
```

`minimize` returns `None` on convergence. It raises `MaxIterReached` when the
iteration budget runs out and `OutOfDomain` when the oracle returns a NaN or
infinite value at the iterate; both derive from `SolverError`.

The callback receives the solver after every iteration:

```python
iterates = []
solver.minimize(MoreThuente(), oracle, 1000, 100, lambda s: iterates.append(s.x.copy()))
```

## Box constraints

```python
from optsolvers.gll_quadratic import GLLQuadratic
from optsolvers.projected_newton import ProjectedNewton

lower = np.array([-1.0, 47.0])
upper = np.array([np.inf, np.inf])
solver = ProjectedNewton(1e-6, np.array([180.0, 152.0]), lower, upper)
solver.minimize(GLLQuadratic(1e-4, 15), oracle, 10000, 1000, None)
```

The starting point is projected onto the box first.

## Online scaled gradient

```python
from optsolvers.osgmg import DiagonalPattern, minimize_osgmg

x = minimize_osgmg(np.array([4.0, 300.0]), oracle, 100000,
                   DiagonalPattern(np.ones(2)), 1.0, 1e-12)
```

The scaling is learnt with AdaGrad steps; a trial point is accepted only if it
lowers the gradient norm. `DensePattern` takes a full matrix instead. The
oracle must supply Hessians.

## Plotting

`Plotter3d(xmin, xmax, ymin, ymax, mesh_size)` draws functions of two
variables with Matplotlib:

```python
from optsolvers.plotter import Plotter3d

(
    Plotter3d(-5.0, 5.0, -5.0, 5.0, 50)
    .append_plot(oracle, "Objective function", 0.5)
    .append_scatter_points(oracle, iterates, "Iterates")
    .set_title("Newton iterates")
    .set_layout_size(1600, 1000)
    .build("quadratic.png")
)
```

`build` writes an HTML page with an embedded SVG when the file name ends in
`.html` or `.htm`, and otherwise saves in the format the extension names.

## What the package does not do

There is no command-line program; everything is used from Python. The
package offers no quasi-Newton (BFGS, DFP, SR1, Broyden) or plain gradient
descent solvers, and no logging setup of its own: messages go through the
standard `logging` module under the `optsolvers.*` logger names.

## Running the tests

```
pip install ".[test]"
pytest
```