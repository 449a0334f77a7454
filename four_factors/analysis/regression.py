"""Ordinary least squares of season wins on four factors differentials.

The fit is a plain QR solve of the design matrix ``[1, X]`` so that the
coefficients match closed-form OLS to double precision.  Inference uses the
Student t distribution with ``n - p - 1`` residual degrees of freedom.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import linalg as scipy_linalg
from scipy import stats as scipy_stats

from ..errors import RegressionError
from ..models import FourFactors, WinRecord

logger = logging.getLogger(__name__)

DIFFERENTIAL_COLUMNS: Tuple[str, ...] = ("efg_diff", "to_diff", "reb_diff", "ftr_diff")
INTERCEPT = "intercept"

DEFAULT_MODEL_SPECS: Dict[str, Tuple[str, ...]] = {
    "shooting": ("efg_diff",),
    "turnovers": ("to_diff",),
    "rebounding": ("reb_diff",),
    "free_throws": ("ftr_diff",),
    "four_factors": DIFFERENTIAL_COLUMNS,
}


@dataclass(frozen=True)
class RegressionResult:
    """Fitted OLS model.  Every per-term mapping is keyed intercept first."""

    predictors: Tuple[str, ...]
    response: str
    coefficients: Dict[str, float]
    std_errors: Dict[str, float]
    t_stats: Dict[str, float]
    p_values: Dict[str, float]
    r_squared: float
    adj_r_squared: float
    n_obs: int
    df_resid: int
    model: Optional[str] = None
    residuals: Tuple[float, ...] = field(default=(), repr=False)

    @property
    def terms(self) -> Tuple[str, ...]:
        return (INTERCEPT,) + self.predictors

    def summary_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "coef": [self.coefficients[t] for t in self.terms],
                "std_err": [self.std_errors[t] for t in self.terms],
                "t": [self.t_stats[t] for t in self.terms],
                "p_value": [self.p_values[t] for t in self.terms],
            },
            index=pd.Index(self.terms, name="term"),
        )

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "response": self.response,
            "predictors": list(self.predictors),
            "coefficients": dict(self.coefficients),
            "std_errors": dict(self.std_errors),
            "t_stats": dict(self.t_stats),
            "p_values": dict(self.p_values),
            "r_squared": self.r_squared,
            "adj_r_squared": self.adj_r_squared,
            "n_obs": self.n_obs,
            "df_resid": self.df_resid,
        }


def build_regression_frame(
    factors: Mapping[str, FourFactors],
    wins: Mapping[str, WinRecord],
) -> pd.DataFrame:
    """One row per team with the four differentials and the win total.

    Only teams present in both mappings are included, sorted by label.
    """
    rows = []
    for team in sorted(set(factors) & set(wins)):
        row = {"team": team}
        row.update(factors[team].differentials())
        row["wins"] = wins[team].wins
        rows.append(row)
    columns = ["team", *DIFFERENTIAL_COLUMNS, "wins"]
    return pd.DataFrame(rows, columns=columns).set_index("team")


def fit_ols(
    frame: pd.DataFrame,
    predictors: Sequence[str],
    response: str = "wins",
    model: Optional[str] = None,
) -> RegressionResult:
    """Fit ``response ~ 1 + predictors`` by ordinary least squares.

    Args:
        frame: One row per observation.
        predictors: Non-empty subset of the frame's columns.
        response: Column holding the dependent variable.
        model: Optional name reported on errors and in the result.

    Raises:
        RegressionError: on missing columns, non-finite values, fewer than
            ``p + 2`` observations (``n == p + 1`` leaves zero residual
            degrees of freedom), a zero-variance predictor or response, or a
            rank-deficient design matrix.
    """
    predictors = tuple(predictors)
    if not predictors:
        raise RegressionError("at least one predictor is required", model=model)
    if len(set(predictors)) != len(predictors):
        raise RegressionError(f"duplicate predictors: {list(predictors)}", model=model)
    missing = [c for c in (*predictors, response) if c not in frame.columns]
    if missing:
        raise RegressionError(f"missing columns: {missing}", model=model)

    data = frame[list(predictors) + [response]].to_numpy(dtype=float)
    if not np.all(np.isfinite(data)):
        raise RegressionError("regression input contains NaN or infinite values", model=model)

    x, y = data[:, :-1], data[:, -1]
    n, p = x.shape
    if n < p + 1:
        raise RegressionError(f"{n} observations cannot identify {p + 1} coefficients", model=model)
    df_resid = n - p - 1
    if df_resid < 1:
        raise RegressionError("no residual degrees of freedom left for inference", model=model)

    for idx, name in enumerate(predictors):
        if np.ptp(x[:, idx]) == 0:
            raise RegressionError(f"predictor '{name}' has zero variance", model=model)
    sst = float(np.sum((y - y.mean()) ** 2))
    if sst == 0:
        raise RegressionError(f"response '{response}' has zero variance", model=model)

    design = np.column_stack([np.ones(n), x])
    if np.linalg.matrix_rank(design) < p + 1:
        raise RegressionError("design matrix is rank deficient", model=model)

    q, r = np.linalg.qr(design)
    beta = scipy_linalg.solve_triangular(r, q.T @ y)
    resid = y - design @ beta
    ssr = float(resid @ resid)

    sigma2 = ssr / df_resid
    r_inv = scipy_linalg.solve_triangular(r, np.eye(p + 1))
    cov = sigma2 * (r_inv @ r_inv.T)
    se = np.sqrt(np.clip(np.diag(cov), 0.0, None))
    with np.errstate(divide="ignore", invalid="ignore"):
        t_stats = beta / se
    p_values = 2.0 * scipy_stats.t.sf(np.abs(t_stats), df_resid)

    r_squared = 1.0 - ssr / sst
    adj_r_squared = 1.0 - (1.0 - r_squared) * (n - 1) / df_resid

    terms = (INTERCEPT,) + predictors
    return RegressionResult(
        predictors=predictors,
        response=response,
        coefficients=dict(zip(terms, map(float, beta))),
        std_errors=dict(zip(terms, map(float, se))),
        t_stats=dict(zip(terms, map(float, t_stats))),
        p_values=dict(zip(terms, map(float, p_values))),
        r_squared=float(r_squared),
        adj_r_squared=float(adj_r_squared),
        n_obs=int(n),
        df_resid=int(df_resid),
        model=model,
        residuals=tuple(float(v) for v in resid),
    )


def fit_models(
    frame: pd.DataFrame,
    specs: Optional[Mapping[str, Sequence[str]]] = None,
    response: str = "wins",
) -> Tuple[Dict[str, RegressionResult], Dict[str, str]]:
    """Fit every named specification; a failure only affects its own model.

    Returns:
        Tuple of (results by model name, error message by model name).
    """
    specs = specs if specs is not None else DEFAULT_MODEL_SPECS
    results: Dict[str, RegressionResult] = {}
    errors: Dict[str, str] = {}
    for name, predictors in specs.items():
        try:
            results[name] = fit_ols(frame, predictors, response=response, model=name)
        except RegressionError as exc:
            logger.warning("Model %s could not be fitted: %s", name, exc)
            errors[name] = str(exc)
    return results, errors
