# pipeline/ — analysis scripts for the volcano type classifier.
#
# Run scripts in order:
#   01_explore_volcanoes → load, label and map volcano types
#   02_fit_resamples     → bootstrap-validated random forest + evaluation plots
