# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del backend administrativo de Zoomi
(ingresos vía Stripe, finanzas y clientes pendientes).

Autor: Zoomi
Fecha: 2026-09-02
"""
