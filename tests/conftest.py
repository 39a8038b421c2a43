import matplotlib

# headless backend for every test that ends up drawing a chart
matplotlib.use("Agg")
