"""Freight Order Parser - извлечение транспортных заказов из букингов партнёров."""
