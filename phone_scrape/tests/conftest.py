"""Shared test fixtures for the phone_scrape test suite."""

import logging
from typing import Dict, Union
from unittest.mock import MagicMock

import pytest
import requests  # type: ignore[import-untyped]

CATALOG_URL = "https://tiendamovil.com.py/shop/celulares/?order=product.date_add.desc"

SAMPLE_CATALOG_HTML = """
<html><body>
<section id="products">
  <article class="product-miniature js-product-miniature">
    <a class="thumbnail product-thumbnail" href="/celulares/iphone-13.html">
      <img data-src="https://cdn.tiendamovil.com.py/img/iphone-13.jpg?v=2" src="/img/placeholder.png">
    </a>
    <h2 class="h3 product-title"><a href="/celulares/iphone-13.html">Celular iPhone 13   128GB</a></h2>
    <div class="product-price-and-shipping"><span class="price">Gs. 4.990.000</span></div>
    <div class="product-description-short">Pantalla 6,1" Super Retina. Cámara dual 12MP. Batería 3240 mAh.</div>
  </article>

  <li class="product">
    <a class="product-img-link" href="https://tiendamovil.com.py/p/galaxy-a54"><img src="/img/galaxy-a54.png"></a>
    <h3><a href="https://tiendamovil.com.py/p/galaxy-a54">Samsung Galaxy A54 8GB RAM 256GB</a></h3>
    <span class="product-brand">Samsung</span>
    <span class="woocommerce-Price-amount">Gs. 2.350.000</span>
  </li>

  <article class="product-miniature">
    <h2 class="h3"><a href="/celulares/iphone-13-oferta.html">CELULAR IPHONE 13 128GB</a></h2>
    <div class="product-price-and-shipping"><span class="price">Gs. 4.500.000</span></div>
  </article>

  <article class="product-miniature">
    <div class="product-price-and-shipping"><span class="price">Gs. 100.000</span></div>
  </article>

  <article class="product-miniature">
    <h2 class="h3"><a href="/celulares/nokia-g21.html">Celular Nokia G21</a></h2>
    <img src="javascript:alert(1)">
    <div class="product-price-and-shipping"><span class="price">Consultar</span></div>
  </article>
</section>
</body></html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_CATALOG_HTML


@pytest.fixture
def catalog_url() -> str:
    return CATALOG_URL


def make_response(body: Union[str, bytes] = b"", status_code: int = 200, url: str = "") -> requests.Response:
    """Build a real requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp.encoding = "utf-8"
    resp.url = url
    resp.reason = "OK" if status_code < 400 else "Not Found"
    return resp


@pytest.fixture
def fake_session():
    """Factory for a mock Session serving canned responses by URL.

    Unknown URLs get a 404.
    """

    def _factory(routes: Dict[str, Union[str, bytes, Exception]]) -> MagicMock:
        session = MagicMock(spec=requests.Session)

        def _get(url, timeout=None, **kwargs):
            body = routes.get(url)
            if isinstance(body, Exception):
                raise body
            if body is None:
                return make_response(b"", status_code=404, url=url)
            return make_response(body, url=url)

        session.get.side_effect = _get
        return session

    return _factory


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so they don't outlive a test."""
    yield
    logger = logging.getLogger("phone_scrape")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
