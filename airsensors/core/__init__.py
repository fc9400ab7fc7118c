"""Protocol core shared by the sensor drivers."""
