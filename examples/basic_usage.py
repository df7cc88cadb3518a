"""Basic usage example: map a photographed 80x60 rectangle to its true shape."""

from homography import HomographyComputation, Line, Point
from homography.coordinates.transformer import CoordinateTransformer
from homography.utils.logger import setup_logger


def main():
    """Solve with four corners and the four sides of the rectangle."""
    logger = setup_logger('basic_usage')
    width, height = 80.0, 60.0

    corners = [Point(148, 337), Point(131, 516), Point(321, 486), Point(332, 370)]
    rectified = [Point(0, 0), Point(0, height), Point(width, height), Point(width, 0)]

    hc = HomographyComputation()
    for source, target in zip(corners, rectified):
        hc.add_point_correspondence(source, target)

    # Sides of the quadrilateral map to the sides of the rectangle
    for i in range(4):
        j = (i + 1) % 4
        hc.add_line_correspondence(Line.from_points(corners[i], corners[j]),
                                   Line.from_points(rectified[i], rectified[j]))

    solution = hc.get_restrictions().compute()
    logger.info("Matrix:\n%s", solution.matrix)
    logger.info("Value: %s", solution.value)

    transformer = CoordinateTransformer(solution.matrix)
    errors = transformer.reprojection_error(
        [p.as_array() for p in corners], [p.as_array() for p in rectified])
    logger.info("Mean reprojection error: %.3e", errors["mean_error"])


if __name__ == "__main__":
    main()
