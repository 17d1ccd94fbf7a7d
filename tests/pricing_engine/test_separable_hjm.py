# -*- coding: utf-8 -*-
import numpy as np

from hjm.pricing_engine.separable_hjm import func_H, func_G, benchmark_times_scaling, func_y, func_Theta_x, \
    func_Theta_s, func_H_T, func_Sigma_T
from hjm.utils import scalar_integral


def test_func_H_and_func_G():
    chi = np.array([0.1, 0.3])
    np.testing.assert_allclose(func_H(chi, 1.0, 3.0), np.exp(-chi * 2.0))
    np.testing.assert_allclose(func_G(chi, 1.0, 3.0), (1 - np.exp(-chi * 2.0)) / chi)
    np.testing.assert_array_equal(func_G(chi, 2.0, 2.0), [0.0, 0.0])

    # G(s,t) = ∫ₛᵗ H(s,u) du
    for k in range(2):
        assert np.isclose(scalar_integral(lambda u: func_H(chi, 1.0, u)[k], 1.0, 3.0), func_G(chi, 1.0, 3.0)[k])


def test_benchmark_times_scaling():
    chi = np.array([0.01, 0.10, 0.30])
    delta = np.array([1.0, 5.0, 10.0])
    HHfInv = benchmark_times_scaling(chi, delta)
    Hf_H_inv = np.exp(-np.outer(delta, chi))
    np.testing.assert_allclose(HHfInv @ Hf_H_inv, np.eye(3), atol=1e-10)

    # Single factor with a short rate benchmark is the Hull-White model
    np.testing.assert_allclose(benchmark_times_scaling(np.array([0.03]), np.array([0.0])), [[1.0]])


def test_func_y_single_factor():
    # Hull-White: y(t) = σ² (1 - exp(-2χt)) / (2χ)
    chi, σ = np.array([0.03]), 0.01
    for t in [0.5, 1.0, 10.0]:
        y = func_y(np.zeros((1, 1)), chi, np.array([[σ]]), 0.0, t)
        assert np.isclose(y[0, 0], σ ** 2 * (1 - np.exp(-2 * 0.03 * t)) / (2 * 0.03), rtol=1e-12)


def test_func_y_roll_forward_is_consistent():
    chi = np.array([0.05, 0.2])
    sigma_T = np.array([[0.010, 0.002],
                        [-0.004, 0.008]])
    y0 = np.zeros((2, 2))

    y_direct = func_y(y0, chi, sigma_T, 0.0, 3.0)
    y_stepped = func_y(func_y(y0, chi, sigma_T, 0.0, 1.2), chi, sigma_T, 1.2, 3.0)
    np.testing.assert_allclose(y_direct, y_stepped, rtol=1e-12)

    np.testing.assert_allclose(y_direct, y_direct.T, rtol=1e-14)
    assert np.all(np.linalg.eigvalsh(y_direct) >= 0)

    # Zero-length roll returns the input
    np.testing.assert_array_equal(func_y(y_direct, chi, sigma_T, 3.0, 3.0), y_direct)


def test_func_H_T():
    chi = np.array([0.1, 0.3])
    H_T = func_H_T(chi, 0.0, 1.0)
    expected = np.array([[np.exp(-0.1), 0.0, (1 - np.exp(-0.1)) / 0.1],
                         [0.0, np.exp(-0.3), (1 - np.exp(-0.3)) / 0.3],
                         [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(H_T, expected, rtol=1e-14)
    np.testing.assert_array_equal(func_H_T(chi, 2.0, 2.0), np.eye(3))


def test_func_Theta_x_single_factor():
    # Hull-White: Θ_x(0,T) = σ² / (2χ²) (1 - exp(-χT))²
    chi, σ = np.array([0.03]), 0.01
    def y(u): return func_y(np.zeros((1, 1)), chi, np.array([[σ]]), 0.0, u)
    def sigma_T(u): return np.array([[σ]])

    for T in [1.0, 5.0, 20.0]:
        theta_x = func_Theta_x(chi, y, sigma_T, np.zeros(1), 0.0, T)
        expected = σ ** 2 / (2 * 0.03 ** 2) * (1 - np.exp(-0.03 * T)) ** 2
        assert np.isclose(theta_x[0], expected, rtol=1e-8)


def test_func_Theta_x_quanto_adjustment():
    chi, σ, α = np.array([0.03]), 0.01, -0.002
    def y(u): return np.zeros((1, 1))
    def sigma_T(u): return np.array([[σ]])

    theta_x = func_Theta_x(chi, y, sigma_T, np.array([α]), 1.0, 4.0)
    assert np.isclose(theta_x[0], σ * α * func_G(chi, 1.0, 4.0)[0], rtol=1e-10)


def test_func_Theta_s_integrates_the_factor_drifts():
    chi = np.array([0.05, 0.2])
    sigma_T_const = np.array([[0.010, 0.002],
                              [-0.004, 0.008]])
    alpha = np.array([0.001, -0.003])
    def y(u): return func_y(np.zeros((2, 2)), chi, sigma_T_const, 0.0, u)
    def sigma_T(u): return sigma_T_const

    s, t = 0.5, 3.0
    theta_s = func_Theta_s(chi, y, sigma_T, alpha, s, t)
    nested = scalar_integral(lambda v: np.sum(func_Theta_x(chi, y, sigma_T, alpha, s, v)), s, t)
    assert np.isclose(theta_s, nested, rtol=1e-7)


def test_func_Theta_s_is_half_the_variance_of_s():
    # E[exp(-s(T))] = 1 requires Θ_s(0,T) = ½ Var[s(T)] = ½ ∫₀ᵀ G(u,T)ᵀσᵀ(u)σ(u)G(u,T) du
    chi = np.array([0.05, 0.2])
    sigma_T_const = np.array([[0.010, 0.002],
                              [-0.004, 0.008]])
    def y(u): return func_y(np.zeros((2, 2)), chi, sigma_T_const, 0.0, u)
    def sigma_T(u): return sigma_T_const

    T = 7.0
    theta_s = func_Theta_s(chi, y, sigma_T, np.zeros(2), 0.0, T)
    var_s = scalar_integral(lambda u: np.sum((func_G(chi, u, T) @ sigma_T_const) ** 2), 0.0, T)
    assert np.isclose(theta_s, 0.5 * var_s, rtol=1e-8)


def test_func_Sigma_T():
    chi = np.array([0.1, 0.3])
    sigma_T_const = np.array([[0.010, 0.002],
                              [-0.004, 0.008]])
    f = func_Sigma_T(chi, lambda u: sigma_T_const, 0.0, 2.0)

    u = 0.5
    Sigma_T = f(u)
    assert Sigma_T.shape == (3, 2)
    np.testing.assert_allclose(Sigma_T[:2], np.diag(np.exp(-chi * 1.5)) @ sigma_T_const, rtol=1e-14)
    np.testing.assert_allclose(Sigma_T[2], func_G(chi, u, 2.0) @ sigma_T_const, rtol=1e-14)

    # At the end of the period the state volatility is the instantaneous volatility and s has no diffusion
    np.testing.assert_allclose(f(2.0)[:2], sigma_T_const, rtol=1e-14)
    np.testing.assert_allclose(f(2.0)[2], [0.0, 0.0], atol=1e-16)
